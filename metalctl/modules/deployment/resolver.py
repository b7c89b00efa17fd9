"""
Deployment manifest resolution.

Every entry is validated against the known boot configs and filled in from
the global profile before anything is published. A manifest is applied
completely or not at all.
"""
import json
import logging
from typing import Dict, Iterable, List, Optional, Set, Union

from pydantic import ValidationError

from metalctl.modules.deployment.dispatcher import BootArtifactDispatcher, ResolvedEntry
from metalctl.modules.deployment.errors import ManifestError, ResolutionError
from metalctl.modules.deployment.models import BootConfig, DeploymentManifest, ProfileKind
from metalctl.modules.deployment.registry import DeploymentRegistry

logger = logging.getLogger("metalctl.resolver")


def parse_manifest(payload: Union[str, bytes, dict]) -> DeploymentManifest:
    """Parse a JSON manifest.

    Raises:
        ManifestError: If the payload is not valid JSON or not a manifest
    """
    try:
        data = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
        return DeploymentManifest.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ManifestError(f"Unable to parse deployment configuration: {e}") from e


class DeploymentConfigResolver:
    """Resolves manifests against a set of boot configs and commits them."""

    def __init__(
        self,
        registry: DeploymentRegistry,
        dispatcher: BootArtifactDispatcher,
        boot_configs: Optional[Iterable[BootConfig]] = None,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.boot_configs: Dict[str, BootConfig] = {}
        # Per-host paths published by the last successful pass
        self._host_paths: Set[str] = set()
        self.set_boot_configs(boot_configs or [])

    def set_boot_configs(self, boot_configs: Iterable[BootConfig]) -> None:
        self.boot_configs = {c.config_name: c for c in boot_configs}

    def resolve(self, manifest: DeploymentManifest) -> List[ResolvedEntry]:
        """Attach boot configs and inherited values to every entry.

        The input manifest is left untouched.

        Raises:
            ResolutionError: On the first entry naming an unknown boot config
            ManifestError: If a MAC appears twice, ignoring case
        """
        resolved = []
        seen = set()
        for entry in manifest.configs:
            mac = entry.mac.lower()
            if mac in seen:
                raise ManifestError(f"Host [{entry.mac}] appears more than once, stopping config update")
            seen.add(mac)

            boot = self.boot_configs.get(entry.config_name)
            if boot is None:
                raise ResolutionError(entry.mac, entry.config_name)

            host = entry.config_host.populate_from(manifest.global_config)
            kind = ProfileKind.from_config_name(entry.config_name)
            logger.debug(f"Resolved [{entry.mac}] to {kind.value} config [{entry.config_name}]")
            resolved.append(ResolvedEntry(
                entry=entry.model_copy(update={'config_host': host, 'config_boot': boot}),
                boot=boot,
                kind=kind,
            ))
        return resolved

    def apply(self, manifest: DeploymentManifest) -> List[ResolvedEntry]:
        """Resolve, publish and swap in ``manifest``.

        An empty manifest leaves the current deployment in place.
        """
        logger.info("Updating the Deployment Configuration")
        if not manifest.configs:
            logger.warning("No deployment configuration, any existing configuration will remain")
            return []

        with self.registry.writer():
            logger.debug(f"Parsing [{len(manifest.configs)}] Configurations")
            resolved = self.resolve(manifest)

            # Render everything first so a template failure publishes nothing
            rendered = [self.dispatcher.render(r) for r in resolved]
            published = set()
            for artifacts in rendered:
                self.dispatcher.publish_artifacts(artifacts)
                published.update(artifacts)

            # Hosts dropped or moved to a profile with fewer artifacts
            stale = self._host_paths - published
            if stale:
                logger.debug(f"Retracting {len(stale)} artifacts from the previous deployment")
                self.dispatcher.store.retract(stale)
            self._host_paths = published

            self.registry.swap(DeploymentManifest(
                global_config=manifest.global_config,
                configs=[r.entry for r in resolved],
            ))

        logger.info("Updating of deployment configuration complete")
        return resolved

    def apply_json(self, payload: Union[str, bytes, dict]) -> List[ResolvedEntry]:
        return self.apply(parse_manifest(payload))
