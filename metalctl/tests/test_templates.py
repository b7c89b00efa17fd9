import pytest

from metalctl.modules.deployment import HostBootProfile, RenderError
from metalctl.modules.templates import (
    ipxe_anyboot,
    ipxe_kickstart,
    ipxe_preseed,
    ipxe_reboot,
    ipxe_vsphere,
    build_esxi_kickstart,
    build_kickstart,
    build_preseed,
    read_ssh_key,
)
from metalctl.modules.templates.ipxe import HEADER


def test_anyboot_script():
    script = ipxe_anyboot("10.0.0.1", "/images/vmlinuz", "images/initrd", "quiet")
    assert script == HEADER + (
        "kernel http://10.0.0.1/images/vmlinuz quiet\n"
        "initrd http://10.0.0.1/images/initrd\n"
        "boot\n"
    )


def test_preseed_and_kickstart_scripts_point_at_cfg():
    preseed = ipxe_preseed("10.0.0.1", "linux", "initrd.gz", "")
    assert "url=http://10.0.0.1/${mac:hexhyp}.cfg" in preseed
    kickstart = ipxe_kickstart("10.0.0.1", "vmlinuz", "initrd.img", "")
    assert "inst.ks=http://10.0.0.1/${mac:hexhyp}.cfg" in kickstart


def test_vsphere_script_has_no_initrd():
    script = ipxe_vsphere("10.0.0.1", "mboot.c32", "")
    assert "initrd" not in script
    assert script.rstrip().endswith("boot")


def test_scripts_are_pure():
    assert ipxe_preseed("a", "k", "i", "c") == ipxe_preseed("a", "k", "i", "c")
    assert ipxe_reboot() == ipxe_reboot()


def test_missing_kernel_is_a_render_error():
    with pytest.raises(RenderError):
        ipxe_anyboot("10.0.0.1", "", "initrd", "")
    with pytest.raises(RenderError):
        ipxe_preseed("10.0.0.1", "linux", "", "")


def test_preseed_dhcp_when_no_address():
    rendered = build_preseed(HostBootProfile(username="deploy"))
    assert "netcfg/get_ipaddress" not in rendered
    assert "d-i passwd/username string deploy" in rendered


def test_kickstart_dhcp_when_no_address():
    rendered = build_kickstart(HostBootProfile(username="deploy", adapter="eth0"))
    assert "network --bootproto=dhcp --device=eth0" in rendered
    assert rendered.rstrip().endswith("%end")


def test_installers_require_credentials():
    with pytest.raises(RenderError):
        build_preseed(HostBootProfile())
    with pytest.raises(RenderError):
        build_kickstart(HostBootProfile())
    with pytest.raises(RenderError):
        build_esxi_kickstart(HostBootProfile())


def test_read_ssh_key(tmp_path):
    key = tmp_path / "key.pub"
    key.write_text("ssh-ed25519 AAAA user@host\r\n")
    assert read_ssh_key(str(key)) == "ssh-ed25519 AAAA user@host"
    with pytest.raises(FileNotFoundError):
        read_ssh_key(str(tmp_path / "missing.pub"))
