"""Tabs in the middle of the main window.

The selected tab is the editing session that zen mode works with. When no
tabs are open, there is no session, and commands that need one are disabled.
"""
from __future__ import annotations

import logging
import tkinter
from pathlib import Path
from tkinter import filedialog, messagebox, ttk

log = logging.getLogger(__name__)


class TabManager(ttk.Notebook):
    """The notebook widget that contains the tabs.

    Everything added to it must be a :class:`Tab`. Tk generates
    ``<<NotebookTabChanged>>`` when the selected tab changes, including
    when the last tab is closed.
    """

    def select(self, tab: Tab | None = None) -> Tab | None:  # type: ignore[override]
        """Return the selected tab, or select the given tab.

        When called without arguments, this returns None if there are no tabs.
        """
        if tab is not None:
            super().select(tab)
            return None

        # ttk returns a widget name, or '' when empty
        name = str(super().select())
        return self.nametowidget(name) if name else None

    def tabs(self) -> tuple[Tab, ...]:  # type: ignore[override]
        return tuple(self.nametowidget(str(name)) for name in super().tabs())

    def add_tab(self, tab: Tab) -> Tab:
        """Add *tab* to the end and select it.

        If an equivalent tab (see :meth:`Tab.equivalent`) is already open,
        *tab* is destroyed and the existing tab is selected and returned.
        """
        for existing_tab in self.tabs():
            if tab.equivalent(existing_tab):
                tab.destroy()
                self.select(existing_tab)
                return existing_tab

        self.add(tab, text=tab.title)
        self.select(tab)
        # Let Tk show the tab, so that its virtual events work
        self.update()
        return tab

    def close_tab(self, tab: Tab) -> None:
        """Destroy the tab. Unsaved changes are not asked about."""
        self.forget(tab)
        tab.destroy()

    def open_file(self, path: Path) -> FileTab | None:
        """Open a file in a new tab, or select the tab that has it already.

        If the file can't be read, an error dialog is shown and None is returned.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.exception(f"opening {path} failed")
            messagebox.showerror("Opening failed", f"{type(e).__name__}: {e}")
            return None

        tab = self.add_tab(FileTab(self, content=content, path=path))
        assert isinstance(tab, FileTab)
        return tab


class Tab(ttk.Frame):
    """A tab of the :class:`TabManager`, which must be the master widget."""

    master: TabManager

    def __init__(self, manager: TabManager) -> None:
        super().__init__(manager)
        self._title = ""

    @property
    def title(self) -> str:
        """The text shown at the top of the tab."""
        return self._title

    @title.setter
    def title(self, text: str) -> None:
        self._title = text
        if self in self.master.tabs():
            self.master.tab(self, text=text)

    def can_be_closed(self) -> bool:
        """Return False if the tab must stay open, e.g. the user cancelled closing it."""
        return True

    def equivalent(self, other: Tab) -> bool:
        """Return True if the tabs show the same thing, e.g. the same file."""
        return False


class FileTab(Tab):
    """A text widget for editing a file.

    The :attr:`path` is None until the file is saved for the first time.
    """

    def __init__(self, manager: TabManager, content: str = "", path: Path | None = None) -> None:
        super().__init__(manager)
        self.path = None if path is None else path.resolve()

        self.textwidget = tkinter.Text(self, width=1, height=1, undo=True, wrap="none")
        scrollbar = ttk.Scrollbar(self, command=self.textwidget.yview)
        self.textwidget.config(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")
        self.textwidget.pack(side="left", fill="both", expand=True)

        self.textwidget.insert("1.0", content)
        # the content from the file is not an undoable change
        self.textwidget.edit_reset()
        self.textwidget.edit_modified(False)
        self.textwidget.bind("<<Modified>>", self._update_title, add=True)
        self._update_title()

    def equivalent(self, other: Tab) -> bool:
        return isinstance(other, FileTab) and self.path is not None and other.path == self.path

    def has_unsaved_changes(self) -> bool:
        return bool(self.textwidget.edit_modified())

    def _update_title(self, junk_event: object = None) -> None:
        name = "New File" if self.path is None else self.path.name
        self.title = f"*{name}*" if self.has_unsaved_changes() else name

    def can_be_closed(self) -> bool:
        if not self.has_unsaved_changes():
            return True

        answer = messagebox.askyesnocancel(
            "Close file", f"Do you want to save your changes to {self.title.strip('*')}?"
        )
        if answer is None:
            return False
        return self.save() if answer else True

    def save(self, *, save_as: bool = False) -> bool:
        """Save the file, and return whether that worked.

        The user is asked where to save if ``save_as=True`` is given or the
        file hasn't been saved before. False is returned when the user
        cancels that dialog or writing the file fails.
        """
        path = self.path
        if save_as or path is None:
            # asksaveasfilename() returns '' or () when cancelled
            chosen = filedialog.asksaveasfilename()
            if not chosen:
                return False
            path = Path(chosen)

        try:
            path.write_text(self.textwidget.get("1.0", "end - 1 char"), encoding="utf-8")
        except OSError as e:
            log.exception(f"saving to {path} failed")
            messagebox.showerror("Saving failed", f"{type(e).__name__}: {e}")
            return False

        self.path = path.resolve()
        self.textwidget.edit_modified(False)
        self._update_title()
        return True
