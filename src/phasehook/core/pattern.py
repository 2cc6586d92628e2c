"""Dotted pattern parsing and wildcard matching.

A pattern reads ``<namespace>.<part1>...<partN>.<action>`` with N >= 0.
Registration patterns may use ``*`` in any name-part position; the
wildcard is only honoured on the registered side of a comparison.
"""

from __future__ import annotations

from dataclasses import dataclass

from phasehook.core.errors import PatternMalformed

SEPARATOR = "."
WILDCARD = "*"


@dataclass(frozen=True)
class Pattern:
    """Decomposed pattern.

    Attributes:
        namespace_id: First segment.
        name_parts: Segments between the namespace and the action.
        action: Last segment (conventionally ``call``, ``get`` or ``set``).
    """

    namespace_id: str
    name_parts: tuple[str, ...]
    action: str

    def __str__(self) -> str:
        return SEPARATOR.join((self.namespace_id, *self.name_parts, self.action))

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in self.name_parts


def parse_pattern(pattern: str) -> Pattern:
    """Split a dotted pattern into namespace, name parts and action.

    Raises:
        PatternMalformed: If ``pattern`` is not a string or has fewer
            than two segments.
    """
    if not isinstance(pattern, str):
        raise PatternMalformed(pattern)

    segments = pattern.split(SEPARATOR)
    if len(segments) < 2:
        raise PatternMalformed(pattern)

    return Pattern(
        namespace_id=segments[0],
        name_parts=tuple(segments[1:-1]),
        action=segments[-1],
    )


def matches(hook_pattern: Pattern, fired: Pattern) -> bool:
    """Return True if a registered pattern accepts a fired pattern.

    Namespace and action must be equal, the name-part counts must agree,
    and every registered part must be ``*`` or equal to its counterpart.
    """
    if hook_pattern.namespace_id != fired.namespace_id:
        return False
    if hook_pattern.action != fired.action:
        return False
    if len(hook_pattern.name_parts) != len(fired.name_parts):
        return False
    return all(
        part == WILDCARD or part == other
        for part, other in zip(hook_pattern.name_parts, fired.name_parts)
    )
