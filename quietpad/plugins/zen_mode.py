"""Zen Mode button in the View menu.

Zen mode is distraction free mode and full screen at the same time. The
menu item says "Enter Zen Mode" or "Exit Zen Mode" depending on what
clicking it would do, and it is hidden if full screen isn't supported.
"""
from __future__ import annotations

import logging

from quietpad import actions, get_main_window, get_tab_manager, menubar
from quietpad.messages import message
from quietpad.plugins import distraction_free, fullscreen
from quietpad.zen import ModeToggle

log = logging.getLogger(__name__)

setup_after = ["distraction_free", "fullscreen"]

ACTION_NAME = "Toggle Zen Mode"

_toggle: ModeToggle | None = None


def get_mode_toggle() -> ModeToggle:
    if _toggle is None:
        raise RuntimeError("zen_mode plugin has not been set up")
    return _toggle


def setup() -> None:
    global _toggle
    _toggle = ModeToggle(
        distraction_free.get_distraction_free_mode(), fullscreen.get_window_service(), message
    )

    def toggle_zen_mode() -> None:
        get_mode_toggle().activate(get_tab_manager().select())
        menubar.refresh_action(action)

    action = actions.register_action(
        name=ACTION_NAME,
        description=message("action.ToggleZenMode.description"),
        callback=toggle_zen_mode,
        update_callback=_toggle.update_presentation,
    )
    menubar.add_action("View", action)

    def refresh(junk: object) -> None:
        menubar.refresh_action(action)

    # Refresh when things change in other ways than through the zen mode menu item.
    # The label is also refreshed whenever the View menu is opened.
    get_main_window().bind("<<DistractionFreeModeChanged>>", refresh, add=True)
    get_tab_manager().bind("<<GlobalSettingChanged:fullscreen_supported>>", refresh, add=True)
