"""The main window and the widgets in it.

Layout of the main window::

    horizontal paned window
    +------------+----------------------------+-------------+
    | side panel | vertical paned window      | side panel  |
    |            | +------------------------+ |             |
    |            | | tab manager            | |             |
    |            | +------------------------+ |             |
    |            | | bottom panel           | |             |
    |            | +------------------------+ |             |
    +------------+----------------------------+-------------+

Plugins add their panels to the paned windows. Distraction free mode hides
all of them.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import tkinter
import types

from quietpad import tabs

log = logging.getLogger(__name__)


@dataclasses.dataclass
class _MainWindow:
    root: tkinter.Tk
    horizontal_panedwindow: tkinter.PanedWindow
    vertical_panedwindow: tkinter.PanedWindow
    tab_manager: tabs.TabManager
    parsed_args: argparse.Namespace


_main_window: _MainWindow | None = None


def _log_callback_error(
    exc_type: type[BaseException], exc: BaseException, tb: types.TracebackType | None
) -> None:
    log.error("error in tkinter callback", exc_info=(exc_type, exc, tb))


# undocumented on purpose, don't use in plugins
def init(args: argparse.Namespace) -> None:
    global _main_window
    assert _main_window is None, "init() called twice"

    root = tkinter.Tk(className="Quietpad")
    windowing_system = root.tk.call("tk", "windowingsystem")
    log.debug(f"Tk {root.tk.eval('info patchlevel')}, windowing system {windowing_system}")
    root.protocol("WM_DELETE_WINDOW", quit)
    # pytest wants tkinter's default handler, it patches it in tests
    if "PYTEST_CURRENT_TEST" not in os.environ:
        root.report_callback_exception = _log_callback_error

    horizontal = tkinter.PanedWindow(root, orient="horizontal", sashwidth=4, borderwidth=0)
    horizontal.pack(fill="both", expand=True)
    vertical = tkinter.PanedWindow(horizontal, orient="vertical", sashwidth=4, borderwidth=0)
    horizontal.add(vertical, stretch="always")
    tab_manager = tabs.TabManager(vertical)
    vertical.add(tab_manager, stretch="always")

    _main_window = _MainWindow(root, horizontal, vertical, tab_manager, args)


def _get() -> _MainWindow:
    if _main_window is None:
        raise RuntimeError("Quietpad is not running")
    return _main_window


def get_main_window() -> tkinter.Tk:
    return _get().root


def get_horizontal_panedwindow() -> tkinter.PanedWindow:
    """Side panels go here, to the left or right of the vertical paned window."""
    return _get().horizontal_panedwindow


def get_vertical_panedwindow() -> tkinter.PanedWindow:
    """Panels above or below the tabs go here."""
    return _get().vertical_panedwindow


def get_tab_manager() -> tabs.TabManager:
    return _get().tab_manager


def get_parsed_args() -> argparse.Namespace:
    """Return the command line arguments that Quietpad was started with."""
    return _get().parsed_args


def quit() -> None:
    """Close the main window, like the X button does.

    Nothing happens if any tab's :meth:`~quietpad.tabs.Tab.can_be_closed`
    returns False. That usually means that the user clicked *Cancel* in a
    dialog asking about unsaved changes.
    """
    tab_manager = get_tab_manager()
    if all(tab.can_be_closed() for tab in tab_manager.tabs()):
        for tab in tab_manager.tabs():
            tab_manager.close_tab(tab)
        get_main_window().destroy()
