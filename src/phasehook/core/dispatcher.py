"""Hook dispatcher.

Routes registrations to namespaces by the pattern's first segment and
fires matching hooks sequentially in phase order. Each fire() owns a
fresh HookContext; the hook list is snapshotted before the first hook
runs, so registrations made while a fire is in flight only affect later
fires.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Iterable, Mapping

from phasehook.core.context import create_execution_context
from phasehook.core.errors import HookInvocationError
from phasehook.core.hooks import Hook, HookCallback
from phasehook.core.namespace import Namespace, Unregister
from phasehook.core.pattern import SEPARATOR, parse_pattern
from phasehook.core.registry import NamespaceRegistry

logger = logging.getLogger(__name__)

METHOD_ACTION = "call"
GETTER_ACTION = "get"
SETTER_ACTION = "set"


def _noop(ctx: Any, *args: Any) -> None:
    return None


class HookDispatcher:
    """Registers hooks against dotted patterns and fires them."""

    def __init__(self, registry: NamespaceRegistry | None = None) -> None:
        self.registry = registry if registry is not None else NamespaceRegistry()

    @classmethod
    def from_config(cls) -> HookDispatcher:
        """Build a dispatcher whose namespaces default to Config.DEFAULT_PHASES."""
        from phasehook.config import Config

        return cls(NamespaceRegistry(default_phases=Config.DEFAULT_PHASES))

    # -- namespaces --

    def create_namespace(
        self,
        namespace_id: str,
        phases: Iterable[str] | None = None,
        shared_context: Mapping[str, Any] | None = None,
    ) -> Namespace:
        return self.registry.create_namespace(namespace_id, phases, shared_context)

    def remove_namespace(self, namespace_id: str) -> None:
        self.registry.remove_namespace(namespace_id)

    def namespace(self, namespace_id: str) -> Namespace:
        return self.registry.lookup(namespace_id)

    # -- hooks --

    def add_hook(
        self, pattern: str, callback: HookCallback, phase: str | None = None
    ) -> Unregister:
        """Register ``callback`` on ``pattern``.

        Returns:
            A handle that removes exactly this hook when called.

        Raises:
            PatternMalformed: If the pattern cannot be parsed.
            NamespaceNotFound: If the pattern's namespace is not registered.
        """
        parsed = parse_pattern(pattern)
        namespace = self.registry.lookup(parsed.namespace_id)
        return namespace.add_hook(pattern, callback, phase)

    def register_method(self, pattern: str, callback: HookCallback) -> Unregister:
        """Register ``callback`` on ``<pattern>.call``."""
        return self.add_hook(pattern + SEPARATOR + METHOD_ACTION, callback)

    def register_property(
        self,
        pattern: str,
        getter: HookCallback | None = None,
        setter: HookCallback | None = None,
    ) -> Unregister:
        """Register a getter on ``<pattern>.get`` and a setter on ``<pattern>.set``.

        The returned handle removes both hooks.
        """
        remove_getter = self.add_hook(pattern + SEPARATOR + GETTER_ACTION, getter or _noop)
        try:
            remove_setter = self.add_hook(
                pattern + SEPARATOR + SETTER_ACTION, setter or _noop
            )
        except Exception:
            remove_getter()
            raise

        def unregister() -> bool:
            removed_getter = remove_getter()
            removed_setter = remove_setter()
            return removed_getter or removed_setter

        return unregister

    def filter_matches(self, pattern: str) -> list[Hook]:
        parsed = parse_pattern(pattern)
        return self.registry.lookup(parsed.namespace_id).filter_matches(parsed)

    def has_match(self, pattern: str) -> bool:
        """Return True if at least one hook would run for ``pattern``.

        An unknown namespace simply has no matches.
        """
        parsed = parse_pattern(pattern)
        namespace = self.registry.get(parsed.namespace_id)
        return namespace is not None and namespace.has_match(parsed)

    # -- dispatch --

    async def fire(self, pattern: str, *args: Any) -> Any:
        """Run every hook matching ``pattern`` in phase order.

        Each hook is called as ``callback(ctx, *args)`` and its result is
        awaited when awaitable. A non-None result replaces
        ``ctx.return_value``; ``ctx.stop()`` ends the chain after the
        current hook.

        Returns:
            The final ``ctx.return_value`` (None if no hook produced one).

        Raises:
            PatternMalformed: If the pattern cannot be parsed.
            NamespaceNotFound: If the namespace is not registered.
            HookInvocationError: If a hook fails; later hooks do not run.
        """
        parsed = parse_pattern(pattern)
        namespace = self.registry.lookup(parsed.namespace_id)
        ctx = create_execution_context(namespace, pattern, args)
        matched = namespace.filter_matches(parsed)

        logger.debug("Firing %s: %d hook(s) matched", pattern, len(matched))

        for hook in matched:
            try:
                result = hook.callback(ctx, *args)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                logger.warning(
                    "Hook failed: pattern=%s hook=%s phase=%s error=%r",
                    pattern,
                    hook.pattern,
                    hook.phase,
                    exc,
                )
                raise HookInvocationError(pattern, hook, exc) from exc

            if result is not None:
                ctx.return_value = result
            if ctx.stopped:
                logger.debug(
                    "Fire stopped: %s at hook %s (phase=%s)", pattern, hook.pattern, hook.phase
                )
                break

        return ctx.return_value
