"""Per-namespace facade.

Maps method calls and property access by name onto fire() calls,
without intercepting attribute access.
"""

from __future__ import annotations

from typing import Any

from phasehook.core.dispatcher import (
    GETTER_ACTION,
    METHOD_ACTION,
    SETTER_ACTION,
    HookDispatcher,
)
from phasehook.core.hooks import HookCallback
from phasehook.core.namespace import Unregister
from phasehook.core.pattern import SEPARATOR


class NamespaceFacade:
    """Name-based access to one namespace of a dispatcher.

    Example::

        nodes = NamespaceFacade(dispatcher, "nodes")
        nodes.property("node1.status", getter, setter)
        await nodes.set("node1.status", "offline")
        await nodes.get("node1.status")  # "offline"
    """

    def __init__(self, dispatcher: HookDispatcher, namespace_id: str) -> None:
        self._dispatcher = dispatcher
        self.namespace_id = namespace_id

    def __repr__(self) -> str:
        return f"NamespaceFacade({self.namespace_id!r})"

    def _pattern(self, name: str, action: str | None = None) -> str:
        parts = [self.namespace_id, name]
        if action is not None:
            parts.append(action)
        return SEPARATOR.join(parts)

    async def invoke(self, name: str, *args: Any) -> Any:
        return await self._dispatcher.fire(self._pattern(name, METHOD_ACTION), *args)

    async def get(self, name: str) -> Any:
        return await self._dispatcher.fire(self._pattern(name, GETTER_ACTION))

    async def set(self, name: str, value: Any) -> Any:
        return await self._dispatcher.fire(self._pattern(name, SETTER_ACTION), value)

    def method(self, name: str, callback: HookCallback) -> Unregister:
        return self._dispatcher.register_method(self._pattern(name), callback)

    def property(
        self,
        name: str,
        getter: HookCallback | None = None,
        setter: HookCallback | None = None,
    ) -> Unregister:
        return self._dispatcher.register_property(self._pattern(name), getter, setter)

    def hook(self, name: str, callback: HookCallback, phase: str | None = None) -> Unregister:
        """Register on ``<namespace>.<name>``; ``name`` includes the action."""
        return self._dispatcher.add_hook(self._pattern(name), callback, phase)

    def has(self, name: str) -> bool:
        return self._dispatcher.has_match(self._pattern(name))
