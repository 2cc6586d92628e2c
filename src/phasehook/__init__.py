"""phasehook: pattern-addressed, phase-ordered async hook dispatch."""

from .core import (
    AmbiguousDefaultPhase,
    Hook,
    HookContext,
    HookDispatcher,
    HookError,
    HookInvocationError,
    Namespace,
    NamespaceMismatch,
    NamespaceNotFound,
    NamespaceRegistry,
    NoDefaultPhase,
    Pattern,
    PatternMalformed,
    PhaseError,
    parse_pattern,
)
from .facade import NamespaceFacade
from .plugin import Plugin, PluginMeta
from .plugin_manager import PluginManager

__version__ = "0.1.0"

__all__ = [
    "HookDispatcher",
    "NamespaceRegistry",
    "Namespace",
    "NamespaceFacade",
    "Hook",
    "HookContext",
    "Pattern",
    "parse_pattern",
    "Plugin",
    "PluginMeta",
    "PluginManager",
    "HookError",
    "PatternMalformed",
    "NamespaceNotFound",
    "NamespaceMismatch",
    "PhaseError",
    "NoDefaultPhase",
    "AmbiguousDefaultPhase",
    "HookInvocationError",
]
