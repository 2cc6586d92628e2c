"""Pattern-addressed hook dispatch engine."""

from .context import create_execution_context
from .dispatcher import HookDispatcher
from .errors import (
    AmbiguousDefaultPhase,
    HookError,
    HookInvocationError,
    NamespaceMismatch,
    NamespaceNotFound,
    NoDefaultPhase,
    PatternMalformed,
    PhaseError,
)
from .hooks import Hook, HookContext
from .namespace import DEFAULT_PHASES, Namespace, parse_phases
from .pattern import WILDCARD, Pattern, matches, parse_pattern
from .registry import NamespaceRegistry

__all__ = [
    # dispatcher
    "HookDispatcher",
    "NamespaceRegistry",
    "Namespace",
    "DEFAULT_PHASES",
    "parse_phases",
    # hooks
    "Hook",
    "HookContext",
    "create_execution_context",
    # patterns
    "Pattern",
    "WILDCARD",
    "matches",
    "parse_pattern",
    # errors
    "HookError",
    "PatternMalformed",
    "NamespaceNotFound",
    "NamespaceMismatch",
    "PhaseError",
    "NoDefaultPhase",
    "AmbiguousDefaultPhase",
    "HookInvocationError",
]
