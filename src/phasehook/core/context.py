"""Execution context factory.

Provides a convenience function for creating HookContext instances.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from phasehook.core.hooks import HookContext

if TYPE_CHECKING:
    from phasehook.core.namespace import Namespace


def create_execution_context(
    namespace: Namespace, pattern: str, args: Iterable[Any] = ()
) -> HookContext:
    """Create a fresh HookContext for one fire() call.

    The namespace's shared context is copied shallowly: rebinding a key
    on the context stays local, while mutating a shared value in place
    is visible to every fire on the namespace.

    Example::

        ctx = create_execution_context(ns, "sys.login.call", ("admin", "1234"))
        # ctx.args == ("admin", "1234")
        # ctx.return_value is None and not ctx.stopped
    """
    return HookContext(
        pattern=pattern,
        args=tuple(args),
        shared=dict(namespace.shared_context),
    )
