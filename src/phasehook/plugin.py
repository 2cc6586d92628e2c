"""Plugin base class and metadata.

Plugins are self-describing units of functionality. Each plugin declares
its identity via PluginMeta and registers hooks against dotted patterns.

The phase a plugin's hooks run in and its dependencies are NOT part of
plugin metadata; they belong to the plugin registry (plugins.yaml) and are
passed as explicit parameters to PluginManager.load().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Tuple, Union

from phasehook.core.hooks import HookCallback


@dataclass(frozen=True)
class PluginMeta:
    """Immutable plugin identity."""

    name: str
    version: str
    description: str = ""


HookSpec = Union[HookCallback, Tuple[HookCallback, str]]


class Plugin(ABC):
    """Base class for all plugins.

    Subclasses must:
      - Set ``meta`` as a class attribute or in ``__init__``.
      - Implement ``on_load()`` and ``on_unload()``.
      - Optionally override ``register_hooks()`` to take part in dispatch.
    """

    meta: PluginMeta

    @abstractmethod
    async def on_load(self, config: dict[str, Any]) -> None:
        """Called when the plugin is loaded.

        ``config`` comes from plugins.yaml or the plugin's own config file.
        """

    @abstractmethod
    async def on_unload(self) -> None:
        """Called when the plugin is about to be unloaded."""

    def register_hooks(self) -> dict[str, HookSpec]:
        """Return a mapping of pattern -> callback.

        A value may also be a ``(callback, phase)`` tuple to pin that hook
        to a phase. Callback signature: ``(ctx: HookContext, *args) -> Any``,
        sync or async.

        Default implementation returns an empty dict (no hooks).
        """
        return {}
