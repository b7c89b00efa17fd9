import pytest
from fastapi.testclient import TestClient

from metalctl.api.main import app
from metalctl.config import Config

HEADERS = {"X-API-Key": Config.API_KEY}


@pytest.fixture
def client(service):
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"alive": True}


def test_post_requires_api_key(client, manifest):
    response = client.post("/deployment", json=manifest)
    assert response.status_code == 403


def test_apply_and_serve(client, manifest):
    response = client.post("/deployment", json=manifest, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["hosts"] == [
        {"mac": "00:50:56:a5:11:20", "kind": "preseed"},
        {"mac": "00:50:56:A5:11:21", "kind": "kickstart"},
    ]

    script = client.get("/00-50-56-a5-11-20.ipxe")
    assert script.status_code == 200
    assert script.text.startswith("#!ipxe")
    assert script.headers["content-type"].startswith("text/plain")

    assert client.get("/00-50-56-a5-11-21.cfg").status_code == 200
    assert client.get("/00-50-56-a5-11-20.ks").status_code == 404

    deployment = client.get("/deployment").json()
    assert deployment["configs"][0]["mac"] == "00:50:56:a5:11:20"
    assert deployment["configs"][0]["config"]["username"] == "deploy"


def test_unknown_config_is_bad_request(client, manifest):
    manifest["configs"][1]["deployment"] = "nope"
    response = client.post("/deployment", json=manifest, headers=HEADERS)
    assert response.status_code == 400
    assert "00:50:56:A5:11:21" in response.json()["detail"]
    assert "nope" in response.json()["detail"]
    assert client.get("/00-50-56-a5-11-20.ipxe").status_code == 404


def test_malformed_manifest_is_bad_request(client):
    response = client.post("/deployment", content=b"{broken", headers=HEADERS)
    assert response.status_code == 400


def test_lookup(client, manifest):
    client.post("/deployment", json=manifest, headers=HEADERS)
    assert client.get("/lookup/00:50:56:A5:11:20").json()["deployment"] == "preseed"
    assert client.get("/lookup/de:ad:be:ef:00:00").json()["deployment"] == ""


def test_unknown_path_is_not_found(client):
    assert client.get("/nothing.txt").status_code == 404
    assert client.get("/nothing.ipxe").status_code == 404


def test_reboot_script(client):
    response = client.get("/reboot.ipxe")
    assert response.status_code == 200
    assert "reboot" in response.text


def test_config_roundtrip(client, service):
    assert len(client.get("/config").json()["bootConfigs"]) == len(service.boot_configs)

    response = client.post(
        "/config",
        json={"bootConfigs": [{"configName": "preseed", "kernelPath": "new/linux", "initrdPath": "new/initrd"}]},
        headers=HEADERS,
    )
    assert response.status_code == 200
    assert [c["configName"] for c in response.json()["bootConfigs"]] == ["preseed"]
    assert "new/linux" in client.get("/preseed.ipxe").text


def test_etcd_plan(client):
    response = client.post(
        "/etcd/plan",
        json={
            "hostname1": "etcd01", "address1": "10.0.0.1",
            "hostname2": "etcd02", "address2": "10.0.0.2",
            "hostname3": "etcd03", "address3": "10.0.0.3",
            "initCA": True,
        },
        headers=HEADERS,
    )
    assert response.status_code == 200
    actions = response.json()["actions"]
    assert len(actions) == 24
    assert actions[0]["command"] == "kubeadm init phase certs etcd-ca"
    assert [a["source"] for a in actions if a["kind"] == "download"] == [
        "/tmp/10.0.0.3.tar.gz",
        "/tmp/10.0.0.2.tar.gz",
    ]


def test_uppercase_mac_config_is_fetchable(client):
    manifest = {
        "globalConfig": {"username": "deploy"},
        "configs": [{"mac": "AA:BB:CC:DD:EE:FF", "deployment": "preseed"}],
    }
    assert client.post("/deployment", json=manifest, headers=HEADERS).status_code == 200

    script = client.get("/aa-bb-cc-dd-ee-ff.ipxe")
    assert script.status_code == 200
    assert "${mac:hexhyp}.cfg" in script.text
    assert client.get("/aa-bb-cc-dd-ee-ff.cfg").status_code == 200
    assert client.get("/AA-BB-CC-DD-EE-FF.cfg").status_code == 200


def test_duplicate_mac_is_bad_request(client):
    manifest = {
        "globalConfig": {"username": "deploy"},
        "configs": [
            {"mac": "aa:bb:cc:dd:ee:01", "deployment": "preseed"},
            {"mac": "AA:BB:CC:DD:EE:01", "deployment": "kickstart"},
        ],
    }
    response = client.post("/deployment", json=manifest, headers=HEADERS)
    assert response.status_code == 400
    assert client.get("/lookup/aa:bb:cc:dd:ee:01").json()["deployment"] == ""


def test_dropped_host_returns_not_found(client):
    base = {"globalConfig": {"username": "deploy"}}
    client.post("/deployment", json={**base, "configs": [{"mac": "aa:bb:cc:dd:ee:01", "deployment": "preseed"}]}, headers=HEADERS)
    client.post("/deployment", json={**base, "configs": [{"mac": "aa:bb:cc:dd:ee:02", "deployment": "preseed"}]}, headers=HEADERS)

    assert client.get("/aa-bb-cc-dd-ee-01.ipxe").status_code == 404
    assert client.get("/aa-bb-cc-dd-ee-02.ipxe").status_code == 200
