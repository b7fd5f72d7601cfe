"""Imports the plugins in :mod:`quietpad.plugins` and runs their ``setup()``.

A plugin module can define ``setup_after``, a list of names of plugins that
must be set up before it. For example, the zen mode plugin uses the services
of the ``distraction_free`` and ``fullscreen`` plugins in its ``setup()``.

A broken plugin doesn't prevent Quietpad or other plugins from starting.
Its error goes to the log and to :attr:`PluginInfo.error`.

When all plugins have been set up, ``<<PluginsLoaded>>`` is generated on the
main window.
"""
from __future__ import annotations

import dataclasses
import enum
import graphlib
import importlib
import logging
import pkgutil
import traceback
import types
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from quietpad import get_main_window, plugins
from quietpad.settings import global_settings

log = logging.getLogger(__name__)


class Status(enum.Enum):
    LOADING = enum.auto()  # imported, waiting for setup()
    ACTIVE = enum.auto()
    DISABLED_BY_SETTINGS = enum.auto()  # listed in the disabled_plugins setting
    DISABLED_ON_COMMAND_LINE = enum.auto()  # listed in --without-plugins
    IMPORT_FAILED = enum.auto()
    SETUP_FAILED = enum.auto()  # setup() raised an exception or logged an error
    CIRCULAR_DEPENDENCY_ERROR = enum.auto()  # setup_after lists form a cycle


@dataclasses.dataclass(eq=False)
class PluginInfo:
    """A plugin and what happened to it.

    The ``error`` is a traceback or an error message when loading the plugin
    failed, and None otherwise.
    """

    name: str  # "foo" means quietpad/plugins/foo.py
    status: Status
    module: types.ModuleType | None = None
    error: str | None = None


# Don't modify outside this file
plugin_infos: list[PluginInfo] = []


def _import(info: PluginInfo) -> None:
    try:
        info.module = importlib.import_module(f"{plugins.__name__}.{info.name}")
    except Exception:
        log.exception(f"importing the {info.name!r} plugin failed")
        info.status = Status.IMPORT_FAILED
        info.error = traceback.format_exc()


# undocumented on purpose, don't use in plugins
def import_plugins(disabled_on_command_line: list[str]) -> None:
    assert not plugin_infos, "plugins were imported already"
    disabled_in_settings = global_settings.get("disabled_plugins", list[str])

    for module_info in pkgutil.iter_modules(plugins.__path__):
        if module_info.name.startswith("_"):
            continue

        info = PluginInfo(module_info.name, Status.LOADING)
        plugin_infos.append(info)
        if info.name in disabled_in_settings:
            info.status = Status.DISABLED_BY_SETTINGS
        elif info.name in disabled_on_command_line:
            info.status = Status.DISABLED_ON_COMMAND_LINE
        else:
            _import(info)


_H = TypeVar("_H", bound=Hashable)


# Generic, so that tests can use something simpler than plugin infos
def _setup_order(
    dependencies: dict[_H, set[_H]],
    sort_key: Callable[[_H], Any],
    on_cycle: Callable[[list[_H]], None],
) -> list[_H]:
    """Order items so that each item comes after everything it depends on.

    Items that are ready at the same time are sorted with *sort_key*, so the
    order is the same every time. Each dependency cycle is passed to
    *on_cycle* and its items are left out.
    """
    remaining = {item: set(deps) for item, deps in dependencies.items()}
    while True:
        sorter = graphlib.TopologicalSorter(remaining)
        try:
            sorter.prepare()
        except graphlib.CycleError as e:
            # e.args[1] is like [a, b, c, a]
            cycle = e.args[1]
            on_cycle(cycle)
            for item in cycle:
                remaining.pop(item, None)
            for deps in remaining.values():
                deps.difference_update(cycle)
            continue

        result: list[_H] = []
        while sorter.is_active():
            ready = sorted(sorter.get_ready(), key=sort_key)
            result.extend(ready)
            sorter.done(*ready)
        return result


def _mark_circular(cycle: list[PluginInfo]) -> None:
    message = "circular dependency: " + " -> ".join(info.name for info in cycle)
    log.error(message)
    for info in cycle:
        info.status = Status.CIRCULAR_DEPENDENCY_ERROR
        info.error = message


def _run_setup(info: PluginInfo) -> None:
    assert info.module is not None

    # Errors logged during setup() mean that the plugin doesn't work
    logged_errors: list[logging.LogRecord] = []
    handler = logging.Handler(logging.ERROR)
    handler.emit = logged_errors.append  # type: ignore[method-assign]
    plugin_logger = logging.getLogger(info.module.__name__)
    plugin_logger.addHandler(handler)

    log.debug(f"setting up {info.name}")
    try:
        info.module.setup()
    except Exception:
        log.exception(f"setting up the {info.name!r} plugin failed")
        info.status = Status.SETUP_FAILED
        info.error = traceback.format_exc()
    else:
        if logged_errors:
            info.status = Status.SETUP_FAILED
            info.error = "\n".join(record.getMessage() for record in logged_errors)
        else:
            info.status = Status.ACTIVE
    finally:
        plugin_logger.removeHandler(handler)


# undocumented on purpose, don't use in plugins
def run_setup_functions() -> None:
    infos_by_name = {info.name: info for info in plugin_infos}
    dependencies = {
        info: {
            infos_by_name[name]
            for name in getattr(info.module, "setup_after", [])
            if name in infos_by_name
        }
        for info in plugin_infos
        if info.status == Status.LOADING
    }

    for info in _setup_order(dependencies, (lambda info: info.name), _mark_circular):
        # dependencies that are disabled or failed to import are in the order too
        if info.status == Status.LOADING:
            _run_setup(info)

    get_main_window().event_generate("<<PluginsLoaded>>")
