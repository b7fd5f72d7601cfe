"""Zen mode: distraction free mode and a full screen window at the same time.

This module doesn't know anything about tkinter. The :class:`ModeToggle`
class gets everything it needs as constructor arguments:

- a :class:`DistractionFreeService` that can tell whether distraction
  free mode is on and toggle it,
- a :class:`WindowService` that finds the window (the *frame*) of a context
  and makes it full screen,
- a function that looks up menu labels by message ID.

The *context* is whatever the host uses to represent the current editing
session. In Quietpad, it's the selected tab, or None if there are no tabs.
ModeToggle never looks inside it, it only passes it to
:meth:`WindowService.frame_for`.

Zen mode is not stored anywhere. It is on when distraction free mode is on
and the window is full screen (or full screen isn't supported at all), and
it's recomputed every time someone asks.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from quietpad.actions import Presentation

log = logging.getLogger(__name__)

ENTER_MESSAGE_ID = "action.ToggleZenMode.enter"
EXIT_MESSAGE_ID = "action.ToggleZenMode.exit"


class DistractionFreeService(Protocol):
    def is_enabled(self) -> bool: ...

    def toggle(self) -> None: ...


class WindowService(Protocol):
    def is_full_screen_supported(self) -> bool: ...

    def is_full_screen(self, frame: Any) -> bool: ...

    def set_full_screen(self, frame: Any, value: bool) -> None: ...

    def frame_for(self, context: Any) -> Any | None: ...


class ModeToggle:
    def __init__(
        self,
        distraction_free: DistractionFreeService,
        windows: WindowService,
        get_message: Callable[[str], str],
    ) -> None:
        self._distraction_free = distraction_free
        self._windows = windows
        self._get_message = get_message

    def is_zen_mode_enabled(self, context: Any) -> bool:
        if not self._distraction_free.is_enabled():
            return False
        if self._windows.is_full_screen_supported():
            frame = self._windows.frame_for(context)
            if frame is None or not self._windows.is_full_screen(frame):
                return False
        return True

    def update_presentation(self, context: Any) -> Presentation:
        """Decide how the zen mode menu item looks right now.

        Without full screen support, zen mode would do exactly the same
        thing as distraction free mode, so the item is hidden.
        """
        enter_label = self._get_message(ENTER_MESSAGE_ID)

        if not self._windows.is_full_screen_supported():
            return Presentation(visible=False, enabled=True, label=enter_label)

        if context is None:
            return Presentation(visible=True, enabled=False, label=enter_label)

        if self.is_zen_mode_enabled(context):
            return Presentation(label=self._get_message(EXIT_MESSAGE_ID))
        return Presentation(label=enter_label)

    def activate(self, context: Any) -> None:
        if context is None:
            log.debug("no session, not toggling zen mode")
            return
        # Things may have changed since update_presentation(), e.g. the
        # window manager can exit full screen on its own.
        self.apply_zen_mode(context, not self.is_zen_mode_enabled(context))

    def apply_zen_mode(self, context: Any, target: bool) -> None:
        """Turn distraction free mode and full screen on or off.

        Distraction free mode is toggled first. If there is no window to
        make full screen, the two can end up out of sync, and that's fine.
        """
        if context is None:
            return

        log.info(f"{'entering' if target else 'exiting'} zen mode")

        if self._distraction_free.is_enabled() != target:
            self._distraction_free.toggle()

        if self._windows.is_full_screen_supported():
            frame = self._windows.frame_for(context)
            if frame is None:
                log.debug("no window found, full screen not changed")
            elif self._windows.is_full_screen(frame) != target:
                self._windows.set_full_screen(frame, target)
