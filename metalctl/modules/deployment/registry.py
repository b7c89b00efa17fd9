"""
Process-wide holders for the active deployment and its boot artifacts.

Both stores follow a single writer / many readers discipline: writers hold
a lock, readers see either the previous or the next state, never a mix.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Set

from metalctl.modules.deployment.models import DeploymentEntry, DeploymentManifest

logger = logging.getLogger("metalctl.registry")


class DeploymentRegistry:
    """Holds the last manifest that passed full resolution."""

    def __init__(self):
        self._manifest = DeploymentManifest()
        self._write_lock = threading.Lock()

    @property
    def current(self) -> DeploymentManifest:
        """The active manifest. Never mutated after it has been swapped in."""
        return self._manifest

    @contextmanager
    def writer(self) -> Iterator['DeploymentRegistry']:
        """Serialise update passes so their publications never interleave."""
        with self._write_lock:
            yield self

    def swap(self, manifest: DeploymentManifest) -> None:
        """Replace the active manifest wholesale. Call while holding ``writer()``."""
        self._manifest = manifest
        logger.debug(f"Deployment registry now holds {len(manifest.configs)} hosts")

    def find(self, mac: str) -> Optional[DeploymentEntry]:
        return self._manifest.find(mac)

    def is_empty(self) -> bool:
        return not self._manifest.configs


class ArtifactStore:
    """Path to content mapping served to booting machines."""

    def __init__(self):
        self._content: Dict[str, str] = {}
        self._handled: Set[str] = set()
        self._lock = threading.Lock()

    def publish(self, path: str, content: str) -> bool:
        """Register ``content`` at ``path``, overwriting earlier content.

        Returns True when the path was seen for the first time and a handler
        was associated with it.
        """
        with self._lock:
            self._content[path] = content
            if path in self._handled:
                return False
            self._handled.add(path)
        logger.debug(f"Registered handler for {path}")
        return True

    def retract(self, paths: Iterable[str]) -> None:
        """Stop serving ``paths``. Their handlers stay registered."""
        with self._lock:
            for path in paths:
                self._content.pop(path, None)

    def get(self, path: str) -> Optional[str]:
        return self._content.get(path)

    def paths(self) -> List[str]:
        with self._lock:
            return sorted(self._handled)

    def __contains__(self, path: str) -> bool:
        return path in self._content
