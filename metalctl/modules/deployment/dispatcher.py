"""Render and publish the boot artifacts for resolved hosts."""
import logging
from dataclasses import dataclass
from typing import Dict

from metalctl.modules.deployment.models import BootConfig, DeploymentEntry, ProfileKind
from metalctl.modules.deployment.registry import ArtifactStore, DeploymentRegistry
from metalctl.modules.templates import ipxe, installers

logger = logging.getLogger("metalctl.dispatcher")

# Returned by lookups while every machine is allowed to boot
ANYBOOT = 'anyboot'


@dataclass
class ResolvedEntry:
    """A manifest entry with its boot config attached and global values inherited."""
    entry: DeploymentEntry
    boot: BootConfig
    kind: ProfileKind

    @property
    def dash_mac(self) -> str:
        return self.entry.dash_mac


class BootArtifactDispatcher:
    """Builds iPXE and installer artifacts and publishes them in an ArtifactStore."""

    def __init__(self, store: ArtifactStore, http_address: str):
        self.store = store
        self.http_address = http_address

    def render(self, resolved: ResolvedEntry) -> Dict[str, str]:
        """Render every artifact for one host, keyed by the path it is served on."""
        boot = resolved.boot
        profile = resolved.entry.config_host
        stem = f"/{resolved.dash_mac}"
        address = self.http_address
        ipxe_script = boot_config = esxi_kickstart = ''

        if resolved.kind == ProfileKind.PRESEED:
            ipxe_script = ipxe.ipxe_preseed(address, boot.kernel, boot.initrd, boot.cmdline)
            boot_config = installers.build_preseed(profile)
        elif resolved.kind == ProfileKind.KICKSTART:
            ipxe_script = ipxe.ipxe_kickstart(address, boot.kernel, boot.initrd, boot.cmdline)
            boot_config = installers.build_kickstart(profile)
        elif resolved.kind == ProfileKind.VSPHERE:
            ipxe_script = ipxe.ipxe_vsphere(address, boot.kernel, boot.cmdline)
            boot_config = installers.build_esxi_config(profile, f"http://{address}{stem}.ks")
            esxi_kickstart = installers.build_esxi_kickstart(profile)
        else:
            # Operator defined names and "default" just boot the kernel
            logger.debug(f"Building any-boot configuration for config [{resolved.entry.config_name}]")
            ipxe_script = ipxe.ipxe_anyboot(address, boot.kernel, boot.initrd, boot.cmdline)

        artifacts = {
            f"{stem}.ipxe": ipxe_script,
            f"{stem}.cfg": boot_config,
            f"{stem}.ks": esxi_kickstart,
        }
        return {path: content for path, content in artifacts.items() if content}

    def publish_artifacts(self, artifacts: Dict[str, str]) -> None:
        for path, content in artifacts.items():
            self.store.publish(path, content)

    def publish(self, resolved: ResolvedEntry) -> Dict[str, str]:
        """Render and publish one host. Returns what was published."""
        artifacts = self.render(resolved)
        logger.debug(f"Publishing {resolved.kind.value} artifacts for [{resolved.dash_mac}]")
        self.publish_artifacts(artifacts)
        return artifacts

    def publish_boot_types(self, boot_configs: Dict[str, BootConfig]) -> None:
        """Publish ``/<name>.ipxe`` for each well known boot config name."""
        address = self.http_address
        for kind in ProfileKind:
            boot = boot_configs.get(kind.value)
            if boot is None:
                if kind == ProfileKind.DEFAULT:
                    logger.warning(f"Found [{len(boot_configs)}] configurations and no \"default\" configuration")
                continue
            if kind == ProfileKind.VSPHERE:
                script = ipxe.ipxe_vsphere(address, boot.kernel, boot.cmdline)
            elif kind == ProfileKind.KICKSTART:
                script = ipxe.ipxe_kickstart(address, boot.kernel, boot.initrd, boot.cmdline)
            elif kind == ProfileKind.PRESEED:
                script = ipxe.ipxe_preseed(address, boot.kernel, boot.initrd, boot.cmdline)
            else:
                script = ipxe.ipxe_anyboot(address, boot.kernel, boot.initrd, boot.cmdline)
            self.store.publish(f"/{kind.value}.ipxe", script)


def find_deployment(mac: str, registry: DeploymentRegistry, any_boot: bool = False) -> str:
    """Profile kind a MAC deploys with, or '' when the MAC is unknown.

    With any-boot enabled every machine boots and the manifest is not consulted.
    """
    if any_boot:
        return ANYBOOT

    if registry.is_empty():
        logger.warning("Attempted to perform Mac Address lookup, however no configurations have been loaded")
        return ''

    entry = registry.find(mac)
    if entry is None:
        logger.debug(f"No deployment found for [{mac}]")
        return ''
    return ProfileKind.from_config_name(entry.config_name).value
