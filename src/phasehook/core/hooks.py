"""Hook primitives.

Defines the registered hook record and the context object that flows
through one fire() call's handler chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

from phasehook.core.pattern import Pattern

HookCallback = Callable[..., Union[Any, Awaitable[Any]]]


@dataclass(eq=False)
class Hook:
    """A callback bound to a pattern shape and a phase.

    Compared by identity so that two registrations of the same callback
    on the same pattern stay distinct for removal.
    """

    pattern: Pattern
    callback: HookCallback
    phase: str

    @property
    def namespace_id(self) -> str:
        return self.pattern.namespace_id

    @property
    def name_parts(self) -> tuple[str, ...]:
        return self.pattern.name_parts

    @property
    def action(self) -> str:
        return self.pattern.action


@dataclass
class HookContext:
    """Mutable per-fire context passed as the first argument to every hook.

    Attributes:
        pattern: The fired pattern string.
        args: Positional arguments given to fire().
        shared: Shallow copy of the namespace's shared context.
        return_value: Last non-None value returned by a hook.
        stopped: Set by stop(); remaining hooks are skipped.
    """

    pattern: str
    args: tuple[Any, ...] = ()
    shared: dict[str, Any] = field(default_factory=dict)
    return_value: Any = None
    stopped: bool = False

    def stop(self) -> None:
        self.stopped = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.shared.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.shared[key]

    def __contains__(self, key: str) -> bool:
        return key in self.shared
