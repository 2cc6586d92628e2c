"""Namespace: one registration domain with its own phases, hooks and
shared context."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from phasehook.core.errors import AmbiguousDefaultPhase, NamespaceMismatch, NoDefaultPhase
from phasehook.core.hooks import Hook, HookCallback
from phasehook.core.pattern import Pattern, matches, parse_pattern

logger = logging.getLogger(__name__)

DEFAULT_PHASE_MARKER = "*"
DEFAULT_PHASES = ("main*",)

Unregister = Callable[[], bool]


def parse_phases(phases: Iterable[str]) -> tuple[tuple[str, ...], str]:
    """Strip the default marker from a phase declaration.

    Returns:
        ``(phases, default_phase)``. If no phase carries the marker the
        first phase is the default.

    Raises:
        NoDefaultPhase: If ``phases`` is empty.
        AmbiguousDefaultPhase: If more than one phase is marked.
        TypeError: If ``phases`` is a single string instead of a sequence.
    """
    if isinstance(phases, str):
        raise TypeError(
            f"phases must be a sequence of names, not a string: {phases!r}"
        )
    names: list[str] = []
    marked: list[str] = []
    for phase in phases:
        if phase.endswith(DEFAULT_PHASE_MARKER):
            phase = phase[: -len(DEFAULT_PHASE_MARKER)]
            marked.append(phase)
        names.append(phase)

    if not names:
        raise NoDefaultPhase("A namespace needs at least one phase")
    if len(marked) > 1:
        raise AmbiguousDefaultPhase(marked)

    default = marked[0] if marked else names[0]
    return tuple(names), default


class Namespace:
    """Ordered hook collection for one namespace id.

    Hooks are kept sorted by ascending phase index with ties in
    registration order. A phase that is not declared sorts at index -1,
    ahead of every declared phase.
    """

    def __init__(
        self,
        namespace_id: str,
        phases: Iterable[str] | None = None,
        shared_context: Mapping[str, Any] | None = None,
    ) -> None:
        self.id = namespace_id
        self.phases, self.default_phase = parse_phases(
            DEFAULT_PHASES if phases is None else phases
        )
        # Held by reference: every fire on this namespace copies from it.
        self.shared_context: Any = {} if shared_context is None else shared_context
        self._hooks: list[Hook] = []

    def __repr__(self) -> str:
        return (
            f"Namespace(id={self.id!r}, phases={list(self.phases)!r}, "
            f"default_phase={self.default_phase!r}, hooks={len(self._hooks)})"
        )

    def __len__(self) -> int:
        return len(self._hooks)

    @property
    def hooks(self) -> tuple[Hook, ...]:
        """Snapshot of the phase-ordered hooks."""
        return tuple(self._hooks)

    def phase_index(self, phase: str) -> int:
        try:
            return self.phases.index(phase)
        except ValueError:
            return -1

    def add_hook(
        self, pattern: str, callback: HookCallback, phase: str | None = None
    ) -> Unregister:
        """Register a callback and return a handle that removes it.

        Raises:
            PatternMalformed: If the pattern cannot be parsed.
            NamespaceMismatch: If the pattern names another namespace.
            TypeError: If ``callback`` is not callable.
        """
        parsed = parse_pattern(pattern)
        if parsed.namespace_id != self.id:
            raise NamespaceMismatch(pattern, self.id)
        if not callable(callback):
            raise TypeError(f"Hook callback for '{pattern}' is not callable: {callback!r}")

        phase = self.default_phase if phase is None else phase
        if phase not in self.phases:
            logger.warning(
                "Hook %s registered in undeclared phase %r; it runs before %r",
                pattern,
                phase,
                self.phases[0],
            )

        hook = Hook(pattern=parsed, callback=callback, phase=phase)
        self._hooks.append(hook)
        self._hooks.sort(key=lambda h: self.phase_index(h.phase))
        logger.debug("Hook registered: %s (phase=%s)", pattern, phase)

        def unregister() -> bool:
            return self.remove_hook(hook)

        return unregister

    def remove_hook(self, hook: Hook) -> bool:
        """Remove exactly ``hook``. Returns False if it was already gone."""
        for index, candidate in enumerate(self._hooks):
            if candidate is hook:
                del self._hooks[index]
                logger.debug("Hook removed: %s (phase=%s)", hook.pattern, hook.phase)
                return True
        return False

    def filter_matches(self, pattern: str | Pattern) -> list[Hook]:
        """Return the hooks matching a fired pattern, in phase order.

        The returned list is independent of the namespace, so hooks
        added or removed afterwards do not affect it.
        """
        fired = parse_pattern(pattern) if isinstance(pattern, str) else pattern
        return [hook for hook in self._hooks if matches(hook.pattern, fired)]

    def has_match(self, pattern: str | Pattern) -> bool:
        return bool(self.filter_matches(pattern))

    def clear(self) -> None:
        self._hooks.clear()
