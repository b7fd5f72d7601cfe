"""Distraction free mode: hide everything around the tabs.

Side panels added by other plugins live in the paned windows of the main
window. When distraction free mode is on, all of them are hidden, and only
the tab manager stays visible. Turning it off shows the same panels again,
in the same places.

The main window gets a ``<<DistractionFreeModeChanged>>`` virtual event
whenever distraction free mode is toggled.
"""
from __future__ import annotations

import logging
import tkinter

from quietpad import (
    actions,
    get_horizontal_panedwindow,
    get_main_window,
    get_tab_manager,
    get_vertical_panedwindow,
    menubar,
    utils,
)
from quietpad.messages import message

log = logging.getLogger(__name__)


def _contains(parent: tkinter.Misc, child: tkinter.Misc) -> bool:
    return str(child) == str(parent) or str(child).startswith(str(parent) + ".")


class DistractionFreeMode:
    def __init__(self, panedwindows: list[tkinter.PanedWindow], keep: tkinter.Misc) -> None:
        self._panedwindows = panedwindows
        self._keep = keep
        # None when distraction free mode is off
        self._hidden: list[tuple[tkinter.PanedWindow, tkinter.Misc]] | None = None

    def is_enabled(self) -> bool:
        return self._hidden is not None

    def toggle(self) -> None:
        if self._hidden is None:
            self._hide_panes()
        else:
            self._show_panes()
        get_main_window().event_generate("<<DistractionFreeModeChanged>>")

    def _hide_panes(self) -> None:
        hidden = []
        for panedwindow in self._panedwindows:
            for pane_name in panedwindow.panes():
                pane = panedwindow.nametowidget(str(pane_name))
                if _contains(pane, self._keep):
                    continue
                # leave alone panes that someone else has hidden
                if panedwindow.tk.getboolean(panedwindow.panecget(pane, "hide")):
                    continue
                panedwindow.paneconfigure(pane, hide=True)
                hidden.append((panedwindow, pane))

        log.info(f"distraction free mode on, hid {len(hidden)} panes")
        self._hidden = hidden

    def _show_panes(self) -> None:
        assert self._hidden is not None
        for panedwindow, pane in self._hidden:
            if not utils.widget_exists(pane):
                log.debug(f"pane was destroyed while hidden: {pane}")
                continue
            if str(pane) not in map(str, panedwindow.panes()):
                log.debug(f"pane was removed while hidden: {pane}")
                continue
            panedwindow.paneconfigure(pane, hide=False)

        log.info("distraction free mode off")
        self._hidden = None


_distraction_free_mode: DistractionFreeMode | None = None


def get_distraction_free_mode() -> DistractionFreeMode:
    if _distraction_free_mode is None:
        raise RuntimeError("distraction_free plugin has not been set up")
    return _distraction_free_mode


def setup() -> None:
    global _distraction_free_mode
    _distraction_free_mode = DistractionFreeMode(
        [get_horizontal_panedwindow(), get_vertical_panedwindow()], keep=get_tab_manager()
    )

    action = actions.register_action(
        name=message("action.ToggleDistractionFreeMode"),
        description=message("action.ToggleDistractionFreeMode.description"),
        callback=_distraction_free_mode.toggle,
    )
    menubar.add_action("View", action)
