"""User-visible texts of menu items, looked up by message ID.

Use :func:`message` instead of hard-coding a label when the label may
change, for example depending on whether a mode is on or off::

    from quietpad.messages import message

    label = message("action.ToggleZenMode.enter")

Users can replace any of the texts with the ``message_overrides`` setting.
It is a JSON object in ``settings.json`` that maps message IDs to texts.
"""
from __future__ import annotations

import logging

from quietpad.settings import global_settings

log = logging.getLogger(__name__)

_DEFAULT_MESSAGES: dict[str, str] = {
    "action.ToggleZenMode.enter": "Enter Zen Mode",
    "action.ToggleZenMode.exit": "Exit Zen Mode",
    "action.ToggleZenMode.description": (
        "Hide everything except the file being edited and make the window full screen"
    ),
    "action.ToggleDistractionFreeMode": "Toggle Distraction Free Mode",
    "action.ToggleDistractionFreeMode.description": "Hide side panels around the tabs",
    "action.ToggleFullScreen": "Toggle Full Screen",
    "action.ToggleFullScreen.description": "Make the window fill the whole screen",
}


def message(message_id: str) -> str:
    """Return the text for a message ID.

    Raises :class:`KeyError` if there is no message with the given ID.
    """
    overrides = global_settings.get("message_overrides", dict[str, str])
    if message_id in overrides:
        return overrides[message_id]
    return _DEFAULT_MESSAGES[message_id]


# undocumented on purpose, don't use in plugins
def init() -> None:
    global_settings.add_option("message_overrides", type=dict[str, str], default={})
    unknown_ids = set(global_settings.get("message_overrides", dict[str, str])) - set(
        _DEFAULT_MESSAGES
    )
    for message_id in sorted(unknown_ids):
        log.warning(f"message_overrides contains an unknown message ID: {message_id!r}")
