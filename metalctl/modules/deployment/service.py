"""Process-wide provisioning service shared by the API and the CLI."""
import logging
from typing import Any, Dict, Iterable, List, Optional

from metalctl.config import Config
from metalctl.modules.deployment.dispatcher import BootArtifactDispatcher, find_deployment
from metalctl.modules.deployment.models import BootConfig, DeploymentManifest
from metalctl.modules.deployment.registry import ArtifactStore, DeploymentRegistry
from metalctl.modules.deployment.resolver import DeploymentConfigResolver, ResolvedEntry, parse_manifest
from metalctl.modules.templates import ipxe

logger = logging.getLogger("metalctl.service")


class ProvisioningService:
    """Owns the registry, the artifact store and the resolver built on them."""

    def __init__(
        self,
        http_address: str,
        boot_configs: Optional[Iterable[BootConfig]] = None,
        any_boot: bool = False,
    ):
        self.any_boot = any_boot
        self.registry = DeploymentRegistry()
        self.store = ArtifactStore()
        self.dispatcher = BootArtifactDispatcher(self.store, http_address)
        self.resolver = DeploymentConfigResolver(self.registry, self.dispatcher)
        self.store.publish("/reboot.ipxe", ipxe.ipxe_reboot())
        self.set_boot_configs(boot_configs or [])

    @property
    def http_address(self) -> str:
        return self.dispatcher.http_address

    @property
    def boot_configs(self) -> List[BootConfig]:
        return list(self.resolver.boot_configs.values())

    def set_boot_configs(self, boot_configs: Iterable[BootConfig]) -> None:
        with self.registry.writer():
            self.resolver.set_boot_configs(boot_configs)
            self.dispatcher.publish_boot_types(self.resolver.boot_configs)
        logger.info(f"Loaded [{len(self.resolver.boot_configs)}] boot configurations")

    def update_deployment(self, payload: Any) -> List[ResolvedEntry]:
        """Apply a manifest given as JSON text, bytes, a dict or a DeploymentManifest."""
        manifest = payload if isinstance(payload, DeploymentManifest) else parse_manifest(payload)
        return self.resolver.apply(manifest)

    def deployment(self) -> DeploymentManifest:
        return self.registry.current

    def find_deployment(self, mac: str) -> str:
        return find_deployment(mac, self.registry, self.any_boot)

    def artifact(self, path: str) -> Optional[str]:
        """Published content at ``path``. Every published path is lowercase."""
        return self.store.get(path.lower())

    def describe(self) -> Dict[str, Any]:
        return {
            'httpAddress': self.http_address,
            'anyBoot': self.any_boot,
            'bootConfigs': [c.model_dump(by_alias=True) for c in self.boot_configs],
        }


# Global service instance
_service: Optional[ProvisioningService] = None


def get_service() -> ProvisioningService:
    """Get or create the global service from Config."""
    global _service
    if _service is None:
        boot_configs = [BootConfig.model_validate(c) for c in Config.load_boot_configs()]
        _service = ProvisioningService(
            http_address=Config.HTTP_ADDRESS,
            boot_configs=boot_configs,
            any_boot=Config.ANY_BOOT,
        )
    return _service


def set_service(service: Optional[ProvisioningService]) -> None:
    """Set the global service instance."""
    global _service
    _service = service
