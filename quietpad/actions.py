"""Named commands that can be shown in menus.

An action has a callback that runs when the user triggers it, and
optionally an update callback that decides how the action looks right now.
The menubar calls :meth:`Action.update` before showing the action, and
calls :attr:`Action.callback` when it's clicked. These happen in separate
Tk events, so callbacks should not assume that nothing changed in between.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any


@dataclasses.dataclass(frozen=True)
class Presentation:
    """How an action looks in a menu.

    Invisible actions are not shown at all. Visible but disabled actions
    are grayed out. An empty label means the name of the action.
    """

    visible: bool = True
    enabled: bool = True
    label: str = ""


AvailabilityCheck = Callable[[], bool]
PresentationUpdater = Callable[[Any], Presentation]


@dataclasses.dataclass(frozen=True)
class Action:
    name: str
    description: str
    callback: Callable[[], None]
    # Used only when there is no update_callback
    availability_callbacks: list[AvailabilityCheck] = dataclasses.field(default_factory=list)
    update_callback: PresentationUpdater | None = None

    def update(self, context: Any) -> Presentation:
        """Return the current presentation of the action.

        The *context* is usually the selected tab, or None if there are no
        tabs. Without an update callback, the label is the name of the
        action, and it's enabled when all availability callbacks return True.
        """
        if self.update_callback is None:
            available = all(check() for check in self.availability_callbacks)
            return Presentation(enabled=available, label=self.name)
        return self.update_callback(context)


_registry: dict[str, Action] = {}


def register_action(
    *,
    name: str,
    description: str,
    callback: Callable[[], None],
    availability_callbacks: list[AvailabilityCheck] | None = None,
    update_callback: PresentationUpdater | None = None,
) -> Action:
    """Create an action and make it available with :func:`get_action`."""
    if name in _registry:
        raise ValueError(f"an action named {name!r} was already registered")
    _registry[name] = Action(
        name, description, callback, list(availability_callbacks or []), update_callback
    )
    return _registry[name]


def get_action(name: str) -> Action | None:
    return _registry.get(name)


def get_all_actions() -> dict[str, Action]:
    # a copy, so that callers can't register actions by adding to it
    return dict(_registry)
