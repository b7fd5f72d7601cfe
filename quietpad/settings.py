"""Settings that are saved to ``settings.json`` in the user's config directory.

Every option has a type and a default value, given to
:meth:`Settings.add_option`. Quietpad uses these options:

- ``disabled_plugins`` (``list[str]``): plugins that are not loaded on startup
- ``fullscreen_supported`` (``bool``): set to False to hide full screen and zen mode
- ``message_overrides`` (``dict[str, str]``): custom texts for menu items,
  see :mod:`quietpad.messages`

When the value of an option changes, the ``<<GlobalSettingChanged:name>>``
virtual event is generated on every widget of the main window. For example::

    get_tab_manager().bind(
        "<<GlobalSettingChanged:fullscreen_supported>>", on_change, add=True
    )
"""
from __future__ import annotations

import copy
import dataclasses
import json
import logging
import tkinter
import typing
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TypeVar

from quietpad import _state, dirs

log = logging.getLogger(__name__)
_T = TypeVar("_T")


# Values of options are always JSON-compatible, so they don't need converting
def _has_type(value: object, expected_type: Any) -> bool:
    origin = typing.get_origin(expected_type)
    if origin is list:
        [item_type] = typing.get_args(expected_type)
        return isinstance(value, list) and all(_has_type(item, item_type) for item in value)
    if origin is dict:
        key_type, value_type = typing.get_args(expected_type)
        return isinstance(value, dict) and all(
            _has_type(k, key_type) and _has_type(v, value_type) for k, v in value.items()
        )
    if expected_type in (bool, str):
        return isinstance(value, expected_type)
    if expected_type is int:
        # isinstance(True, int) is True
        return isinstance(value, int) and not isinstance(value, bool)
    raise NotImplementedError(f"unsupported option type: {expected_type!r}")


@dataclasses.dataclass
class _Option:
    type: Any
    default: object
    value: object


def _widgets_of(widget: tkinter.Misc) -> Iterator[tkinter.Misc]:
    yield widget
    for child in widget.winfo_children():
        yield from _widgets_of(child)


class Settings:
    def __init__(self) -> None:
        self._options: dict[str, _Option] = {}
        # Loaded from settings.json before add_option() was called
        self._unknown_values: dict[str, object] = {}

    def add_option(self, name: str, *, type: Any, default: object, exist_ok: bool = False) -> None:
        """Add a new option.

        If settings.json has a value for the option, it's used instead of
        the default. Adding the same option again is an error, unless
        ``exist_ok=True`` is given and the type and default are the same.
        """
        if name in self._options:
            if not exist_ok:
                raise RuntimeError(f"there's already an option named {name!r}")
            existing = self._options[name]
            assert existing.type == type and existing.default == default
            return

        if not _has_type(default, type):
            raise TypeError(f"default value {default!r} of {name!r} is not of type {type!r}")
        self._options[name] = _Option(type=type, default=default, value=copy.deepcopy(default))

        if name in self._unknown_values:
            value = self._unknown_values.pop(name)
            if _has_type(value, type):
                self.set(name, value)
            else:
                # A typo in settings.json shouldn't make the plugin fail
                log.error(
                    f"ignoring {name!r} in {get_json_path()}: {value!r} is not of type {type!r}"
                )

    def _get_option(self, name: str) -> _Option:
        try:
            return self._options[name]
        except KeyError:
            raise ValueError(f"no option named {name!r}, add_option() wasn't called") from None

    def get(self, name: str, type: type[_T]) -> _T:
        """Return the value of an option.

        The type must be the same as what was given to :meth:`add_option`.
        The result is a copy, so mutating it doesn't change the setting.
        """
        option = self._get_option(name)
        if type != option.type:
            raise TypeError(f"option {name!r} has type {option.type!r}, not {type!r}")
        return copy.deepcopy(option.value)  # type: ignore[return-value]

    def set(self, name: str, value: object) -> None:
        option = self._get_option(name)
        if not _has_type(value, option.type):
            raise TypeError(f"{value!r} is not a valid value for {name!r} of type {option.type!r}")
        if value == option.value:
            return

        log.info(f"{name} changed: {option.value!r} --> {value!r}")
        option.value = copy.deepcopy(value)

        try:
            main_window = _state.get_main_window()
        except RuntimeError:
            # Startup hasn't created any widgets yet, nobody to tell
            return
        for widget in _widgets_of(main_window):
            widget.event_generate(f"<<GlobalSettingChanged:{name}>>")

    def reset(self, name: str) -> None:
        self.set(name, self._get_option(name).default)

    def reset_all(self) -> None:
        """Reset all options to defaults and forget values of unknown options."""
        self._unknown_values.clear()
        for name in list(self._options):
            self.reset(name)

    def get_state(self) -> dict[str, object]:
        """Return what would be saved to settings.json.

        Options that have their default values are left out.
        """
        state = dict(self._unknown_values)
        for name, option in self._options.items():
            if option.value != option.default:
                state[name] = option.value
        return state

    def set_state(self, state: dict[str, object]) -> None:
        for name, value in state.items():
            if name in self._options:
                self.set(name, value)
            else:
                self._unknown_values[name] = value


global_settings = Settings()


# A function and not a constant, because tests replace dirs
def get_json_path() -> Path:
    return Path(dirs.user_config_dir) / "settings.json"


def save() -> None:
    """Write ``global_settings`` to settings.json. This happens when Quietpad exits."""
    text = json.dumps(global_settings.get_state(), indent=4) + "\n"
    get_json_path().write_text(text, encoding="utf-8")


def load() -> None:
    try:
        text = get_json_path().read_text(encoding="utf-8")
    except FileNotFoundError:
        return
    state = json.loads(text)
    if not isinstance(state, dict):
        raise ValueError(f"{get_json_path()} should contain a JSON object")
    global_settings.set_state(state)


# undocumented on purpose, don't use in plugins
def init() -> None:
    try:
        load()
    except (OSError, ValueError):
        log.exception(f"can't read {get_json_path()}, using default settings")
    global_settings.add_option("disabled_plugins", type=list[str], default=[])
