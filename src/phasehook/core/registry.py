"""Namespace registry: maps namespace ids to Namespace instances."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from phasehook.core.errors import NamespaceNotFound
from phasehook.core.namespace import Namespace

logger = logging.getLogger(__name__)


class NamespaceRegistry:
    """Explicitly owned mapping of namespace id to Namespace.

    Each dispatcher holds its own registry, so independent dispatchers
    never see each other's namespaces.
    """

    def __init__(self, default_phases: Iterable[str] | None = None) -> None:
        self._namespaces: dict[str, Namespace] = {}
        self._default_phases = tuple(default_phases) if default_phases is not None else None

    def __contains__(self, namespace_id: object) -> bool:
        return namespace_id in self._namespaces

    def __len__(self) -> int:
        return len(self._namespaces)

    def ids(self) -> list[str]:
        return list(self._namespaces)

    def create_namespace(
        self,
        namespace_id: str,
        phases: Iterable[str] | None = None,
        shared_context: Mapping[str, Any] | None = None,
    ) -> Namespace:
        """Create a namespace, replacing any existing one with the same id.

        Replacing discards every hook of the previous namespace.
        """
        if phases is None:
            phases = self._default_phases
        namespace = Namespace(namespace_id, phases, shared_context)

        previous = self._namespaces.get(namespace_id)
        if previous is not None:
            logger.info(
                "Namespace replaced: %s (%d hooks discarded)", namespace_id, len(previous)
            )
        else:
            logger.info(
                "Namespace created: %s (phases=%s, default=%s)",
                namespace_id,
                list(namespace.phases),
                namespace.default_phase,
            )
        self._namespaces[namespace_id] = namespace
        return namespace

    def remove_namespace(self, namespace_id: str) -> None:
        """Remove a namespace and all its hooks.

        An unknown id is an error, not a silent no-op.

        Raises:
            NamespaceNotFound: If the id is not registered.
        """
        if namespace_id not in self._namespaces:
            raise NamespaceNotFound(namespace_id)
        del self._namespaces[namespace_id]
        logger.info("Namespace removed: %s", namespace_id)

    def lookup(self, namespace_id: str) -> Namespace:
        """Return the namespace for ``namespace_id``.

        Raises:
            NamespaceNotFound: If the id is not registered.
        """
        try:
            return self._namespaces[namespace_id]
        except KeyError:
            raise NamespaceNotFound(namespace_id) from None

    def get(self, namespace_id: str) -> Namespace | None:
        return self._namespaces.get(namespace_id)

    def clear(self) -> None:
        self._namespaces.clear()
