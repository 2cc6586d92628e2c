"""Error taxonomy for pattern parsing, namespace lookup and hook dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from phasehook.core.hooks import Hook


class HookError(Exception):
    """Base class for every error raised by phasehook."""


class PatternMalformed(HookError, ValueError):
    """Pattern has fewer than two dot-separated segments."""

    def __init__(self, pattern: Any) -> None:
        self.pattern = pattern
        super().__init__(
            f"Malformed pattern {pattern!r}: expected '<namespace>[.<name>...].<action>'"
        )


class NamespaceNotFound(HookError, KeyError):
    """Pattern references a namespace id that is not registered."""

    def __init__(self, namespace_id: str) -> None:
        self.namespace_id = namespace_id
        super().__init__(f"Namespace not found: '{namespace_id}'")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return self.args[0]


class NamespaceMismatch(HookError, ValueError):
    """Pattern was routed to a namespace other than the one it names."""

    def __init__(self, pattern: str, namespace_id: str) -> None:
        self.pattern = pattern
        self.namespace_id = namespace_id
        super().__init__(
            f"Pattern '{pattern}' does not belong to namespace '{namespace_id}'"
        )


class PhaseError(HookError, ValueError):
    """Invalid phase declaration for a namespace."""


class NoDefaultPhase(PhaseError):
    """No phase is available to serve as the default."""


class AmbiguousDefaultPhase(PhaseError):
    """More than one phase carries the default marker."""

    def __init__(self, marked: list[str]) -> None:
        self.marked = marked
        super().__init__(f"Multiple phases marked as default: {marked}")


class HookInvocationError(HookError):
    """A hook callback raised, or its awaitable failed, during fire()."""

    def __init__(self, pattern: str, hook: Hook, cause: BaseException) -> None:
        self.pattern = pattern
        self.hook = hook
        self.cause = cause
        super().__init__(
            f"Hook {hook.pattern} (phase={hook.phase}) failed while firing "
            f"'{pattern}': {cause!r}"
        )
