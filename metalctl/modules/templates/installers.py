"""Installer answer files built from a resolved host profile."""
import logging
from typing import List, Optional

from metalctl.modules.deployment.models import HostBootProfile
from metalctl.modules.deployment.errors import RenderError

logger = logging.getLogger("metalctl.templates")


def read_ssh_key(path: str) -> str:
    """Read a public key file as a single line.

    Raises:
        FileNotFoundError: If the key file does not exist
    """
    with open(path, 'r') as f:
        return f.read().rstrip('\r\n')


def _ssh_key(profile: HostBootProfile) -> Optional[str]:
    if not profile.ssh_key_path:
        return None
    try:
        return read_ssh_key(profile.ssh_key_path)
    except OSError as e:
        logger.warning(f"Unable to read SSH key {profile.ssh_key_path}, host will be built without it: {e}")
        return None


def _package_list(profile: HostBootProfile) -> List[str]:
    return profile.packages.replace(',', ' ').split()


def build_preseed(profile: HostBootProfile) -> str:
    """Debian/Ubuntu preseed file."""
    if not profile.username:
        raise RenderError("preseed needs a username")

    lines = [
        "d-i debian-installer/locale string en_US",
        "d-i keyboard-configuration/xkb-keymap select us",
    ]
    if profile.adapter:
        lines.append(f"d-i netcfg/choose_interface select {profile.adapter}")
    if profile.ip_address:
        lines += [
            "d-i netcfg/disable_autoconfig boolean true",
            f"d-i netcfg/get_ipaddress string {profile.ip_address}",
            f"d-i netcfg/get_netmask string {profile.subnet}",
            f"d-i netcfg/get_gateway string {profile.gateway}",
            f"d-i netcfg/get_nameservers string {profile.name_server}",
            "d-i netcfg/confirm_static boolean true",
        ]
    if profile.server_name:
        lines.append(f"d-i netcfg/get_hostname string {profile.server_name}")
    lines += [
        "d-i netcfg/get_domain string",
        "d-i mirror/country string manual",
        f"d-i mirror/http/hostname string {profile.repository_address}",
        f"d-i mirror/http/directory string {profile.mirror_directory}",
        "d-i mirror/http/proxy string",
        "d-i passwd/root-login boolean false",
        f"d-i passwd/user-fullname string {profile.username}",
        f"d-i passwd/username string {profile.username}",
        f"d-i passwd/user-password password {profile.password}",
        f"d-i passwd/user-password-again password {profile.password}",
        "d-i user-setup/allow-password-weak boolean true",
        "d-i clock-setup/utc boolean true",
        "d-i time/zone string UTC",
        "d-i partman-auto/method string lvm",
        "d-i partman-lvm/device_remove_lvm boolean true",
        "d-i partman-lvm/confirm boolean true",
        "d-i partman-lvm/confirm_nooverwrite boolean true",
        "d-i partman-auto/choose_recipe select atomic",
        "d-i partman/confirm_write_new_label boolean true",
        "d-i partman/choose_partition select finish",
        "d-i partman/confirm boolean true",
        "d-i partman/confirm_nooverwrite boolean true",
        f"d-i pkgsel/include string {' '.join(_package_list(profile))}",
        "d-i pkgsel/upgrade select none",
        "d-i grub-installer/only_debian boolean true",
        "d-i finish-install/reboot_in_progress note",
    ]

    key = _ssh_key(profile)
    if key:
        home = f"/home/{profile.username}"
        lines.append(
            "d-i preseed/late_command string "
            f"in-target mkdir -p {home}/.ssh; "
            f"in-target /bin/sh -c \"echo '{key}' >> {home}/.ssh/authorized_keys\"; "
            f"in-target chown -R {profile.username}:{profile.username} {home}/.ssh"
        )

    return "\n".join(lines) + "\n"


def build_kickstart(profile: HostBootProfile) -> str:
    """RHEL/CentOS kickstart file."""
    if not profile.username:
        raise RenderError("kickstart needs a username")

    lines = [
        f"url --url=http://{profile.repository_address}{profile.mirror_directory}",
        "lang en_US.UTF-8",
        "keyboard us",
        "timezone UTC --utc",
    ]
    device = f" --device={profile.adapter}" if profile.adapter else ""
    hostname = f" --hostname={profile.server_name}" if profile.server_name else ""
    if profile.ip_address:
        lines.append(
            f"network --bootproto=static{device} --ip={profile.ip_address} --netmask={profile.subnet} "
            f"--gateway={profile.gateway} --nameserver={profile.name_server}{hostname}"
        )
    else:
        lines.append(f"network --bootproto=dhcp{device}{hostname}")
    lines += [
        "rootpw --lock",
        f"user --name={profile.username} --password={profile.password} --plaintext --groups=wheel",
    ]
    key = _ssh_key(profile)
    if key:
        lines.append(f'sshkey --username={profile.username} "{key}"')
    lines += [
        "firewall --disabled",
        "selinux --permissive",
        "bootloader --location=mbr",
        "zerombr",
        "clearpart --all --initlabel",
        "autopart",
        "reboot",
        "",
        "%packages",
        "@core",
    ]
    lines += _package_list(profile)
    lines.append("%end")

    return "\n".join(lines) + "\n"


ESXI_MODULES = (
    "/jumpstrt.gz --- /useropts.gz --- /features.gz --- /k.b00 --- /uc_intel.b00 --- /uc_amd.b00 "
    "--- /procfs.b00 --- /vmx.v00 --- /vim.v00 --- /sb.v00 --- /s.v00 --- /imgdb.tgz --- /imgpayld.tgz"
)


def build_esxi_config(profile: HostBootProfile, kickstart_url: str) -> str:
    """ESXi boot.cfg pointing the installer at its kickstart."""
    return "\n".join([
        "bootstate=0",
        "title=Loading ESXi installer",
        "timeout=5",
        f"prefix=http://{profile.repository_address}{profile.mirror_directory}",
        "kernel=/b.b00",
        f"kernelopt=ks={kickstart_url}",
        f"modules={ESXI_MODULES}",
        "build=",
        "updated=0",
    ]) + "\n"


def build_esxi_kickstart(profile: HostBootProfile) -> str:
    """ESXi scripted install."""
    if not profile.password:
        raise RenderError("ESXi kickstart needs a root password")

    device = profile.adapter or "vmnic0"
    if profile.ip_address:
        hostname = f" --hostname={profile.server_name}" if profile.server_name else ""
        network = (
            f"network --bootproto=static --device={device} --ip={profile.ip_address} "
            f"--netmask={profile.subnet} --gateway={profile.gateway} "
            f"--nameserver={profile.name_server}{hostname}"
        )
    else:
        network = f"network --bootproto=dhcp --device={device}"

    lines = [
        "vmaccepteula",
        f"rootpw {profile.password}",
        "install --firstdisk --overwritevmfs",
        network,
        "reboot",
        "",
        "%firstboot --interpreter=busybox",
        "vim-cmd hostsvc/enable_ssh",
        "vim-cmd hostsvc/start_ssh",
    ]
    key = _ssh_key(profile)
    if key:
        lines.append(f"echo '{key}' >> /etc/ssh/keys-root/authorized_keys")

    return "\n".join(lines) + "\n"
