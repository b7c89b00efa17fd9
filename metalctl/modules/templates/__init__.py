"""Boot-loader and installer templates."""
from .ipxe import ipxe_preseed, ipxe_kickstart, ipxe_vsphere, ipxe_anyboot, ipxe_reboot
from .installers import (
    read_ssh_key,
    build_preseed,
    build_kickstart,
    build_esxi_config,
    build_esxi_kickstart,
)

__all__ = [
    'ipxe_preseed',
    'ipxe_kickstart',
    'ipxe_vsphere',
    'ipxe_anyboot',
    'ipxe_reboot',
    'read_ssh_key',
    'build_preseed',
    'build_kickstart',
    'build_esxi_config',
    'build_esxi_kickstart',
]
