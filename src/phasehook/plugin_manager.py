"""Plugin lifecycle manager.

Imports plugin modules, runs their load/unload callbacks and keeps their
hooks registered on a HookDispatcher. The phase a plugin's hooks run in
and the plugins it depends on are given to load(), not declared by the
plugin itself.

Status messages go to an optional async notifier.
"""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from phasehook.core.dispatcher import HookDispatcher
from phasehook.core.namespace import Unregister
from phasehook.plugin import HookSpec, Plugin

logger = logging.getLogger(__name__)

Notifier = Callable[[str], Awaitable[None]]


@dataclass
class _LoadedPlugin:
    plugin: Plugin
    module: str
    config: dict[str, Any]
    phase: str | None
    depends_on: list[str]
    unregisters: list[Unregister] = field(default_factory=list)


class PluginManager:
    """Tracks loaded plugins and the hooks each one registered."""

    def __init__(
        self, dispatcher: HookDispatcher, notifier: Notifier | None = None
    ) -> None:
        self.dispatcher = dispatcher
        self._loaded: dict[str, _LoadedPlugin] = {}
        self._notifier = notifier

    @property
    def plugins(self) -> dict[str, Plugin]:
        """Copy of the name -> plugin mapping."""
        return {name: entry.plugin for name, entry in self._loaded.items()}

    async def load(
        self,
        module: str,
        config: dict[str, Any] | None = None,
        phase: str | None = None,
        depends_on: list[str] | None = None,
    ) -> Plugin:
        """Import ``module``, start its plugin and register its hooks.

        Args:
            module: Dotted import path (e.g. ``mypackage.plugins.audit``).
            config: Passed to ``plugin.on_load()``.
            phase: Phase for hooks that do not pin their own. None uses
                each namespace's default phase.
            depends_on: Names of plugins that must already be loaded.

        A plugin with the same name that is already loaded is replaced
        only once the new plugin's hooks are registered; if registration
        fails the old plugin stays in place.

        Raises:
            ValueError: If a dependency is not loaded.
            TypeError: If the module defines no Plugin subclass, or more
                than one.
        """
        config = config if config is not None else {}
        depends_on = depends_on if depends_on is not None else []

        missing = [dep for dep in depends_on if dep not in self._loaded]
        if missing:
            raise ValueError(
                f"Missing dependencies for module '{module}': {missing}"
            )

        try:
            mod = importlib.import_module(module)
        except Exception:
            self._discard_module(module)
            await self._notify(f"Plugin load failed (import): {module}")
            raise

        plugin_cls = self._find_plugin_class(mod)
        if plugin_cls is None:
            self._discard_module(module)
            await self._notify(f"Plugin load failed (no Plugin subclass): {module}")
            raise TypeError(f"No Plugin subclass found in module '{module}'")

        try:
            plugin = plugin_cls()
            await plugin.on_load(config)
        except Exception:
            self._discard_module(module)
            await self._notify(f"Plugin load failed (on_load): {module}")
            raise

        name = plugin.meta.name

        try:
            unregisters = self._register_hooks(plugin.register_hooks(), phase)
        except Exception:
            await self._call_on_unload(plugin, name)
            self._discard_module(module)
            await self._notify(f"Plugin load failed (hooks): {module}")
            raise

        if name in self._loaded:
            await self._retire(name, keep_module=module)
            logger.info("Plugin replaced: %s", name)

        self._loaded[name] = _LoadedPlugin(
            plugin=plugin,
            module=module,
            config=config,
            phase=phase,
            depends_on=depends_on,
            unregisters=unregisters,
        )

        await self._notify(f"Plugin loaded: {name} v{plugin.meta.version}")
        logger.info(
            "Plugin loaded: %s v%s (hooks=%d, phase=%s)",
            name,
            plugin.meta.version,
            len(unregisters),
            phase,
        )
        return plugin

    async def unload(self, name: str) -> None:
        """Stop a plugin, drop its hooks and forget its module.

        Errors from ``on_unload()`` are logged, not raised.

        Raises:
            KeyError: If no plugin of that name is loaded.
        """
        if name not in self._loaded:
            raise KeyError(f"Plugin not loaded: '{name}'")

        await self._retire(name)

        await self._notify(f"Plugin unloaded: {name}")
        logger.info("Plugin unloaded: %s", name)

    async def reload(self, name: str) -> Plugin:
        """Unload and load a plugin again with the same arguments.

        Sends a single reloaded/failed notification.

        Raises:
            KeyError: If no plugin of that name is loaded.
        """
        if name not in self._loaded:
            raise KeyError(f"Plugin not loaded: '{name}'")

        entry = self._loaded[name]

        saved_notifier = self._notifier
        self._notifier = None
        try:
            await self.unload(name)
            plugin = await self.load(
                entry.module, entry.config, entry.phase, entry.depends_on
            )
        except Exception:
            self._notifier = saved_notifier
            await self._notify(f"Plugin reload failed: {name} ({entry.module})")
            raise
        self._notifier = saved_notifier

        await self._notify(f"Plugin reloaded: {name} v{plugin.meta.version}")
        logger.info("Plugin reloaded: %s", name)
        return plugin

    async def load_registry(self, entries: Iterable[dict[str, Any]]) -> list[Plugin]:
        """Load registry entries in order, skipping (and logging) failures.

        Entries come from ``load_plugin_registry()``.
        """
        loaded = []
        for entry in entries:
            try:
                plugin = await self.load(
                    entry["module"],
                    config=entry.get("config"),
                    phase=entry.get("phase"),
                    depends_on=entry.get("depends_on"),
                )
            except Exception:
                logger.error(
                    "Failed to load plugin %s (%s)",
                    entry.get("name"),
                    entry.get("module"),
                    exc_info=True,
                )
                continue
            loaded.append(plugin)
        return loaded

    async def notify_startup_summary(self) -> None:
        """Send a summary of all loaded plugins."""
        if not self._loaded:
            await self._notify("No plugins loaded.")
            return

        lines = ["Plugin startup summary:"]
        for name, entry in self._loaded.items():
            lines.append(
                f"  - {name} v{entry.plugin.meta.version} "
                f"(hooks={len(entry.unregisters)}, phase={entry.phase})"
            )
        await self._notify("\n".join(lines))

    async def _retire(self, name: str, keep_module: str | None = None) -> None:
        """Remove a loaded plugin's hooks, stop it and drop its module.

        ``keep_module`` is left in ``sys.modules`` (the module a
        replacement was just imported from).
        """
        entry = self._loaded.pop(name)
        for unregister in entry.unregisters:
            unregister()
        await self._call_on_unload(entry.plugin, name)
        if entry.module != keep_module:
            self._discard_module(entry.module)

    @staticmethod
    async def _call_on_unload(plugin: Plugin, name: str) -> None:
        try:
            await plugin.on_unload()
        except Exception:
            logger.warning(
                "Error during on_unload for plugin %s", name, exc_info=True
            )

    def _register_hooks(
        self, hooks: dict[str, HookSpec], phase: str | None
    ) -> list[Unregister]:
        """Register a plugin's hooks; roll back all of them on failure."""
        unregisters: list[Unregister] = []
        try:
            for pattern, spec in hooks.items():
                if isinstance(spec, tuple):
                    callback, hook_phase = spec
                else:
                    callback, hook_phase = spec, phase
                unregisters.append(
                    self.dispatcher.add_hook(pattern, callback, hook_phase)
                )
        except Exception:
            for unregister in unregisters:
                unregister()
            raise
        return unregisters

    async def _notify(self, message: str) -> None:
        if self._notifier is None:
            return
        try:
            await self._notifier(message)
        except Exception:
            logger.warning(
                "Failed to send plugin notification: %s",
                message,
                exc_info=True,
            )

    @staticmethod
    def _find_plugin_class(mod: Any) -> type[Plugin] | None:
        """Return the module's Plugin subclass, or None if it has none.

        Raises:
            TypeError: If the module defines more than one.
        """
        candidates = [
            obj
            for obj in vars(mod).values()
            if isinstance(obj, type) and issubclass(obj, Plugin) and obj is not Plugin
        ]
        if len(candidates) > 1:
            names = sorted(c.__name__ for c in candidates)
            raise TypeError(
                f"Module '{mod.__name__}' defines several Plugin subclasses: {names}"
            )
        return candidates[0] if candidates else None

    def _discard_module(self, module_path: str) -> None:
        """Drop a module and its submodules from sys.modules.

        Skipped while a loaded plugin still comes from that module.
        """
        if any(entry.module == module_path for entry in self._loaded.values()):
            return
        prefix = module_path + "."
        for key in [k for k in sys.modules if k == module_path or k.startswith(prefix)]:
            del sys.modules[key]
