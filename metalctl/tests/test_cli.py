import json

from typer.testing import CliRunner

from metalctl.cli import app

runner = CliRunner()


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "deployment" in result.stdout
    assert "etcd" in result.stdout
    assert "serve" in result.stdout


def test_etcd_plan_from_options():
    args = ["etcd", "plan"]
    for i in (1, 2, 3):
        args += ["--hostname", f"etcd0{i}", "--address", f"10.0.0.{i}"]
    result = runner.invoke(app, args)
    assert result.exit_code == 0
    actions = json.loads(result.stdout)
    assert len(actions) == 23
    assert actions[0]["name"] == "Generate temporary directories"


def test_etcd_plan_from_file(tmp_path):
    topology = tmp_path / "etcd.yaml"
    topology.write_text(
        "hostname1: etcd01\naddress1: 10.0.0.1\n"
        "hostname2: etcd02\naddress2: 10.0.0.2\n"
        "hostname3: etcd03\naddress3: 10.0.0.3\n"
    )
    result = runner.invoke(app, ["etcd", "plan", str(topology), "--init-ca", "--output", "yaml"])
    assert result.exit_code == 0
    assert "kubeadm init phase certs etcd-ca" in result.stdout


def test_etcd_plan_needs_three_members():
    result = runner.invoke(app, ["etcd", "plan", "--hostname", "a", "--address", "1.1.1.1"])
    assert result.exit_code == 1


def test_deployment_validate(tmp_path, manifest):
    boot_configs = tmp_path / "boot.yaml"
    boot_configs.write_text(
        "bootConfigs:\n"
        "- configName: preseed\n  kernelPath: ubuntu/linux\n  initrdPath: ubuntu/initrd.gz\n"
        "- configName: kickstart\n  kernelPath: centos/vmlinuz\n  initrdPath: centos/initrd.img\n"
    )
    manifest_file = tmp_path / "deployment.json"
    manifest_file.write_text(json.dumps(manifest))

    result = runner.invoke(app, ["deployment", "validate", str(manifest_file), "--boot-configs", str(boot_configs)])
    assert result.exit_code == 0
    assert "00:50:56:a5:11:20 [preseed]" in result.stdout
    assert "/00-50-56-a5-11-20.cfg" in result.stdout


def test_deployment_validate_unknown_config(tmp_path, manifest):
    boot_configs = tmp_path / "boot.yaml"
    boot_configs.write_text("- configName: preseed\n  kernelPath: linux\n  initrdPath: initrd\n")
    manifest_file = tmp_path / "deployment.json"
    manifest_file.write_text(json.dumps(manifest))

    result = runner.invoke(app, ["deployment", "validate", str(manifest_file), "--boot-configs", str(boot_configs)])
    assert result.exit_code == 1


def test_deployment_apply_missing_file(tmp_path):
    result = runner.invoke(app, ["deployment", "apply", str(tmp_path / "absent.json")])
    assert result.exit_code == 1
