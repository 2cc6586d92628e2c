"""Plugin and namespace registry loading.

Three responsibilities:
  - load_plugin_config:      Load a single plugin's config YAML.
  - load_plugin_registry:    Load the plugins.yaml registry file.
  - load_namespace_registry: Load the namespaces.yaml declarations.

No environment variable expansion. The YAML files are the single source
of truth for plugin identity, phase and dependencies, and for namespace
phases and shared context.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from phasehook.core.dispatcher import HookDispatcher
from phasehook.core.namespace import Namespace

logger = logging.getLogger(__name__)

_REQUIRED_REGISTRY_FIELDS = frozenset({"module", "name"})


def load_plugin_config(path: str | Path) -> dict[str, Any]:
    """Load a single plugin's configuration YAML.

    Returns:
        Parsed dict. Empty dict if the file exists but is empty.

    Raises:
        FileNotFoundError: If the file does not exist.
        TypeError: If the root is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Plugin config not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(
            f"Plugin config must be a YAML mapping, "
            f"got {type(data).__name__}: {path}"
        )
    return data


def load_plugin_registry(path: str | Path) -> list[dict[str, Any]]:
    """Load the plugin registry (plugins.yaml).

    - File missing     -> empty list (no plugins, not an error).
    - Root not a list  -> empty list + warning.
    - Entry not a dict -> skip + warning.
    - Required fields missing -> skip + warning.
    - ``enabled`` is False -> skip (disabled plugin).

    Required fields per entry: ``module``, ``name``. Optional: ``phase``,
    ``depends_on``, ``config`` (inline mapping) or ``config_path`` (file
    loaded with load_plugin_config, relative to the registry file).
    """
    path = Path(path)
    if not path.exists():
        return []

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, list):
        logger.warning("plugins.yaml root is not a list, returning empty registry")
        return []

    valid: list[dict[str, Any]] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("plugins.yaml entry %d is not a dict, skipping", i)
            continue

        missing = _REQUIRED_REGISTRY_FIELDS - set(entry.keys())
        if missing:
            logger.warning(
                "plugins.yaml entry %d missing required fields %s, skipping: %s",
                i,
                missing,
                entry,
            )
            continue

        if "enabled" in entry and not entry["enabled"]:
            logger.info("plugins.yaml entry %d disabled, skipping: %s", i, entry["name"])
            continue

        if "config_path" in entry and "config" not in entry:
            entry["config"] = load_plugin_config(path.parent / entry["config_path"])

        valid.append(entry)

    return valid


def load_namespace_registry(path: str | Path) -> dict[str, dict[str, Any]]:
    """Load namespace declarations (namespaces.yaml).

    The root maps namespace id -> ``{phases: [...], context: {...}}``;
    both keys are optional and an empty value declares a namespace with
    the default phases.

    - File missing      -> empty dict.
    - Root not a dict   -> empty dict + warning.
    - Entry not a dict  -> skip + warning.
    - ``phases`` not a list of strings or ``context`` not a mapping
      -> skip + warning.
    """
    path = Path(path)
    if not path.exists():
        return {}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("namespaces.yaml root is not a mapping, returning empty registry")
        return {}

    valid: dict[str, dict[str, Any]] = {}
    for namespace_id, entry in data.items():
        entry = {} if entry is None else entry
        if not isinstance(entry, dict):
            logger.warning("namespaces.yaml entry %r is not a dict, skipping", namespace_id)
            continue

        phases = entry.get("phases")
        if phases is not None and (
            not isinstance(phases, list) or not all(isinstance(p, str) for p in phases)
        ):
            logger.warning(
                "namespaces.yaml entry %r has invalid phases %r, skipping",
                namespace_id,
                phases,
            )
            continue

        context = entry.get("context")
        if context is not None and not isinstance(context, dict):
            logger.warning(
                "namespaces.yaml entry %r has a non-mapping context, skipping",
                namespace_id,
            )
            continue

        valid[str(namespace_id)] = {"phases": phases, "context": context}

    return valid


def apply_namespace_registry(
    dispatcher: HookDispatcher, entries: dict[str, dict[str, Any]]
) -> list[Namespace]:
    """Create one namespace per registry entry.

    Raises:
        PhaseError: If an entry's phases are empty or ambiguous.
    """
    return [
        dispatcher.create_namespace(namespace_id, entry.get("phases"), entry.get("context"))
        for namespace_id, entry in entries.items()
    ]
