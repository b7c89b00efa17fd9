"""iPXE boot-loader scripts handed to network booting machines.

Every script fetches its kernel (and initrd where the installer needs one)
from the metalctl HTTP server. ``${mac:hexhyp}`` is expanded by iPXE itself
to the booting machine's MAC with dashes, matching the published paths.
"""
from metalctl.modules.deployment.errors import RenderError

HEADER = """#!ipxe
dhcp
echo +-----------------------------------------+
echo | metalctl network boot
echo +-----------------------------------------+
"""

PRESEED_TEMPLATE = HEADER + """kernel http://{address}/{kernel} auto=true url=http://{address}/${{mac:hexhyp}}.cfg priority=critical {cmdline}
initrd http://{address}/{initrd}
boot
"""

KICKSTART_TEMPLATE = HEADER + """kernel http://{address}/{kernel} inst.ks=http://{address}/${{mac:hexhyp}}.cfg {cmdline}
initrd http://{address}/{initrd}
boot
"""

VSPHERE_TEMPLATE = HEADER + """kernel http://{address}/{kernel} -c http://{address}/${{mac:hexhyp}}.cfg {cmdline}
boot
"""

ANYBOOT_TEMPLATE = HEADER + """kernel http://{address}/{kernel} {cmdline}
initrd http://{address}/{initrd}
boot
"""

REBOOT_TEMPLATE = """#!ipxe
echo Rebooting in 5 seconds
sleep 5
reboot
"""


def _require(name: str, value: str) -> None:
    if not value:
        raise RenderError(f"iPXE script needs a {name}")


def _render(template: str, address: str, kernel: str, initrd: str, cmdline: str) -> str:
    return template.format(address=address, kernel=kernel.lstrip('/'), initrd=initrd.lstrip('/'), cmdline=cmdline)


def ipxe_preseed(address: str, kernel: str, initrd: str, cmdline: str) -> str:
    _require('kernel', kernel)
    _require('initrd', initrd)
    return _render(PRESEED_TEMPLATE, address, kernel, initrd, cmdline)


def ipxe_kickstart(address: str, kernel: str, initrd: str, cmdline: str) -> str:
    _require('kernel', kernel)
    _require('initrd', initrd)
    return _render(KICKSTART_TEMPLATE, address, kernel, initrd, cmdline)


def ipxe_vsphere(address: str, kernel: str, cmdline: str) -> str:
    """vSphere images carry everything they need, so no initrd is loaded."""
    _require('kernel', kernel)
    return _render(VSPHERE_TEMPLATE, address, kernel, '', cmdline)


def ipxe_anyboot(address: str, kernel: str, initrd: str, cmdline: str) -> str:
    _require('kernel', kernel)
    script = _render(ANYBOOT_TEMPLATE, address, kernel, initrd, cmdline)
    if not initrd:
        script = script.replace(f"initrd http://{address}/\n", "")
    return script


def ipxe_reboot() -> str:
    return REBOOT_TEMPLATE
