import pytest

from metalctl.modules.deployment import BootConfig
from metalctl.modules.deployment.service import ProvisioningService, set_service
from metalctl.modules.etcd import EtcdMember, EtcdTopology

BOOT_CONFIGS = [
    BootConfig(config_name="default", kernel="ubuntu/linux", initrd="ubuntu/initrd.gz", cmdline="console=tty0"),
    BootConfig(config_name="preseed", kernel="ubuntu/linux", initrd="ubuntu/initrd.gz", cmdline="console=tty0"),
    BootConfig(config_name="kickstart", kernel="centos/vmlinuz", initrd="centos/initrd.img", cmdline="ip=dhcp"),
    BootConfig(config_name="vsphere", kernel="esxi/mboot.c32", cmdline="-p 0"),
    BootConfig(config_name="rescue", kernel="rescue/vmlinuz", initrd="rescue/initrd", cmdline="rescue"),
]


@pytest.fixture
def service():
    svc = ProvisioningService(http_address="192.168.1.1", boot_configs=BOOT_CONFIGS)
    set_service(svc)
    yield svc
    set_service(None)


@pytest.fixture
def topology():
    return EtcdTopology(members=[
        EtcdMember("etcd01", "10.0.0.1"),
        EtcdMember("etcd02", "10.0.0.2"),
        EtcdMember("etcd03", "10.0.0.3"),
    ])


@pytest.fixture
def manifest():
    return {
        "globalConfig": {
            "gateway": "192.168.1.1",
            "subnet": "255.255.255.0",
            "nameserver": "8.8.8.8",
            "adapter": "ens160",
            "repoaddress": "192.168.1.1",
            "mirrordir": "/ubuntu",
            "username": "deploy",
            "password": "s3cret",
            "packages": "openssh-server,curl",
        },
        "configs": [
            {
                "mac": "00:50:56:a5:11:20",
                "deployment": "preseed",
                "config": {"address": "192.168.1.10", "hostname": "node01"},
            },
            {
                "mac": "00:50:56:A5:11:21",
                "deployment": "kickstart",
                "config": {"address": "192.168.1.11", "hostname": "node02", "gateway": "192.168.1.254"},
            },
        ],
    }
