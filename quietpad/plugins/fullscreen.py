"""Full Screen button in the View menu.

Other plugins can use the window service of this plugin to make windows
full screen. See :func:`get_window_service`.
"""
from __future__ import annotations

import logging
import tkinter

from quietpad import actions, get_main_window, menubar, utils
from quietpad.messages import message
from quietpad.settings import global_settings

log = logging.getLogger(__name__)

# Tk supports "wm attributes -fullscreen" on these
_FULLSCREEN_WINDOWING_SYSTEMS = {"x11", "win32", "aqua"}


class TkWindowService:
    """Full screen for tkinter windows.

    Frames are toplevel widgets, and the context is a widget inside the
    toplevel (usually a tab).
    """

    def is_full_screen_supported(self) -> bool:
        if not global_settings.get("fullscreen_supported", bool):
            return False
        windowing_system = get_main_window().tk.call("tk", "windowingsystem")
        return windowing_system in _FULLSCREEN_WINDOWING_SYSTEMS

    def is_full_screen(self, frame: tkinter.Wm) -> bool:
        return frame.tk.getboolean(frame.attributes("-fullscreen"))

    def set_full_screen(self, frame: tkinter.Wm, value: bool) -> None:
        log.debug(f"setting -fullscreen to {value}")
        frame.attributes("-fullscreen", value)

    def frame_for(self, context: tkinter.Misc | None) -> tkinter.Toplevel | tkinter.Tk | None:
        if context is None or not utils.widget_exists(context):
            return None
        return context.winfo_toplevel()


_window_service: TkWindowService | None = None


def get_window_service() -> TkWindowService:
    if _window_service is None:
        raise RuntimeError("fullscreen plugin has not been set up")
    return _window_service


def set_fullscreened(value: bool) -> None:
    get_window_service().set_full_screen(get_main_window(), value)


def get_fullscreened() -> bool:
    return get_window_service().is_full_screen(get_main_window())


def setup() -> None:
    global _window_service
    global_settings.add_option("fullscreen_supported", type=bool, default=True)
    _window_service = TkWindowService()

    action = actions.register_action(
        name=message("action.ToggleFullScreen"),
        description=message("action.ToggleFullScreen.description"),
        callback=lambda: set_fullscreened(not get_fullscreened()),
    )
    menubar.add_action("View", action)
