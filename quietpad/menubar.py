"""The menubar at the top of the main window.

Menus are found with *menu paths*, strings like ``"View/Panels"``. Each part
is the label of a menu, and menus are created when they don't exist yet. A
literal slash in a label is written as ``//``.

For example, a plugin can add a menu item like this::

    from quietpad import menubar

    def setup():
        menubar.get_menu("Tools").add_command(label="Say hi", command=say_hi)

Menu items whose label, enabled-ness or visibility depends on the state of
the editor should be added with :func:`add_action` instead. Their
:class:`~quietpad.actions.Presentation` is refreshed when the menu is opened,
when the selected tab changes, and when :func:`refresh_action` is called.
"""
from __future__ import annotations

import dataclasses
import logging
import re
import tkinter
from collections.abc import Callable
from functools import partial
from pathlib import Path
from tkinter import filedialog

from quietpad import actions, tabs
from quietpad._state import get_main_window, get_tab_manager, quit

log = logging.getLogger(__name__)

# Called after the selected tab changes
_tab_changed_callbacks: list[Callable[[], None]] = []
# Called when the menu with the given path is about to be shown
_menu_opened_callbacks: dict[str, list[Callable[[], None]]] = {}


def _run_callbacks(callbacks: list[Callable[[], None]]) -> None:
    for callback in callbacks:
        callback()


# undocumented on purpose, don't use in plugins
def _init() -> None:
    root = get_main_window()
    root.config(menu=tkinter.Menu(root, tearoff=False))
    get_tab_manager().bind(
        "<<NotebookTabChanged>>",
        lambda event: root.after_idle(_run_callbacks, _tab_changed_callbacks),
        add=True,
    )
    _add_file_menu()
    get_menu("View")


def _split_path(path: str) -> list[str]:
    if not path:
        return []
    # split at single slashes, then turn "//" into "/"
    return [part.replace("//", "/") for part in re.split(r"(?<!/)/(?!/)", path)]


def _join(labels: list[str]) -> str:
    return "/".join(label.replace("/", "//") for label in labels)


def _index_of_label(menu: tkinter.Menu, label: str) -> int | None:
    end = menu.index("end")
    for index in range(0 if end is None else end + 1):
        if menu.type(index) != "separator" and menu.entrycget(index, "label") == label:
            return index
    return None


def _item_count(menu: tkinter.Menu) -> int:
    end = menu.index("end")
    return 0 if end is None else end + 1


def get_menu(path: str) -> tkinter.Menu:
    """Return the menu at *path*, creating it and its parent menus if needed.

    The empty string means the menubar itself. A menu added directly to the
    menubar goes before *Help*, so that *Help* stays last.
    """
    menubar: tkinter.Menu = get_main_window().nametowidget(get_main_window()["menu"])
    labels = _split_path(path)

    menu = menubar
    for depth, label in enumerate(labels, start=1):
        index = _index_of_label(menu, label)
        if index is not None:
            menu = menu.nametowidget(menu.entrycget(index, "menu"))
            continue

        # The parent menu must be given explicitly, otherwise tk gets confused
        # about which menu the cascade belongs to
        submenu = tkinter.Menu(
            menu,
            tearoff=False,
            postcommand=partial(
                _run_callbacks, _menu_opened_callbacks.setdefault(_join(labels[:depth]), [])
            ),
        )
        help_index = _index_of_label(menu, "Help") if menu is menubar else None
        if help_index is None:
            menu.add_cascade(label=label, menu=submenu)
        else:
            menu.insert_cascade(help_index, label=label, menu=submenu)
        menu = submenu

    return menu


def set_enabled_based_on_tab(path: str, callback: Callable[[tabs.Tab | None], bool]) -> None:
    """Disable the menu item at *path* when *callback* returns False.

    The *path* is a menu path whose last part is the label of an item, e.g.
    ``"File/Save"``. The callback gets the selected tab, or None when there
    are no tabs, and it runs now and whenever the selected tab changes.
    """
    *menu_labels, item_label = _split_path(path)
    menu = get_menu(_join(menu_labels))

    def update() -> None:
        index = _index_of_label(menu, item_label)
        if index is None:
            raise LookupError(f"menu item {path!r} not found")
        enabled = callback(get_tab_manager().select())
        menu.entryconfig(index, state=("normal" if enabled else "disabled"))

    update()
    _tab_changed_callbacks.append(update)


@dataclasses.dataclass(eq=False)
class _ActionItem:
    menu_path: str
    action: actions.Action
    command: str  # tcl command name, identifies the item in its menu
    position: int  # index to use when the item appears again after being hidden
    label: str | None = None  # None when hidden

    def find_index(self, menu: tkinter.Menu) -> int | None:
        end = menu.index("end")
        for index in range(0 if end is None else end + 1):
            if (
                menu.type(index) == "command"
                and str(menu.entrycget(index, "command")) == self.command
            ):
                return index
        return None


_action_items: list[_ActionItem] = []


def _refresh(item: _ActionItem) -> None:
    menu = get_menu(item.menu_path)
    index = item.find_index(menu)
    presentation = item.action.update(get_tab_manager().select())

    if not presentation.visible:
        if index is not None:
            log.debug(f"hiding {item.action.name!r} from menu {item.menu_path!r}")
            menu.delete(index)
        item.label = None
        return

    label = presentation.label or item.action.name
    state = "normal" if presentation.enabled else "disabled"
    if index is None:
        position = min(item.position, _item_count(menu))
        menu.insert_command(position, label=label, command=item.command, state=state)
    else:
        menu.entryconfig(index, label=label, state=state)
    item.label = label


def add_action(menu_path: str, action: actions.Action) -> None:
    """Add a menu item that runs ``action.callback`` when clicked.

    The item's label, enabled-ness and visibility come from
    :meth:`~quietpad.actions.Action.update`, called with the selected tab
    (or None) as the context. A hidden item is removed from the menu, and
    it goes back to the same place when it becomes visible again.
    """
    menu_path = _join(_split_path(menu_path))
    menu = get_menu(menu_path)
    # Registered on the root window, because deleting a menu item also
    # deletes tcl commands that the menu itself registered
    command = get_main_window().register(action.callback)
    item = _ActionItem(menu_path, action, command, position=_item_count(menu))
    _action_items.append(item)

    _menu_opened_callbacks.setdefault(menu_path, []).append(partial(_refresh, item))
    _tab_changed_callbacks.append(partial(_refresh, item))
    _refresh(item)


def refresh_action(action: actions.Action) -> None:
    """Update the menu item of *action* now, without waiting for the menu to open."""
    for item in _action_items:
        if item.action is action:
            _refresh(item)


def get_action_label(action: actions.Action) -> str | None:
    """Return the label of the action's menu item, or None if it's hidden."""
    for item in _action_items:
        if item.action is action:
            return item.label
    raise LookupError(f"action {action.name!r} has not been added to the menubar")


def _open_files() -> None:
    # returns '' or () when cancelled
    for filename in filedialog.askopenfilenames():
        get_tab_manager().open_file(Path(filename))


def _save_selected_tab(save_as: bool) -> None:
    tab = get_tab_manager().select()
    assert isinstance(tab, tabs.FileTab)
    tab.save(save_as=save_as)


def _close_selected_tab() -> None:
    tab = get_tab_manager().select()
    assert tab is not None
    if tab.can_be_closed():
        get_tab_manager().close_tab(tab)


def _add_file_menu() -> None:
    file_menu = get_menu("File")
    file_menu.add_command(
        label="New File", command=lambda: get_tab_manager().add_tab(tabs.FileTab(get_tab_manager()))
    )
    file_menu.add_command(label="Open", command=_open_files)
    file_menu.add_command(label="Save", command=partial(_save_selected_tab, False))
    file_menu.add_command(label="Save As", command=partial(_save_selected_tab, True))
    file_menu.add_separator()
    file_menu.add_command(label="Close", command=_close_selected_tab)
    file_menu.add_command(label="Quit", command=quit)

    def is_file_tab(tab: tabs.Tab | None) -> bool:
        return isinstance(tab, tabs.FileTab)

    set_enabled_based_on_tab("File/Save", is_file_tab)
    set_enabled_based_on_tab("File/Save As", is_file_tab)
    set_enabled_based_on_tab("File/Close", lambda tab: tab is not None)
