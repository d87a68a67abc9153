import pytest
from fastapi.testclient import TestClient
from web3.exceptions import ContractLogicError

from modred_ip import server
from modred_ip.errors import ContractCallError

from conftest import CONTRACT_ADDRESS
from test_contract_service import OWNER, ip_asset_tuple, license_tuple


@pytest.fixture
def app(service):
    app = server.create_app()
    app.dependency_overrides[server.get_contract_service] = lambda: service
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def test_get_ip_asset(client, fake_contract):
    fake_contract.results["getIPAsset"] = ip_asset_tuple

    r = client.get("/api/ip/4")

    assert r.status_code == 200
    body = r.json()
    assert body["tokenId"] == "4"
    assert body["owner"] == OWNER
    assert body["totalRevenue"] == str(5 * 10**18)
    assert body["isDisputed"] is False


def test_get_ip_asset_failure_is_502(client, fake_contract):
    fake_contract.failures["getIPAsset"] = ContractLogicError("execution reverted: IP does not exist")

    r = client.get("/api/ip/99")

    assert r.status_code == 502
    assert r.json() == {"detail": "Failed to read IP asset 99"}


def test_get_license(client, fake_contract):
    fake_contract.results["getLicense"] = license_tuple

    r = client.get("/api/license/8")

    assert r.status_code == 200
    assert r.json()["licenseId"] == "8"
    assert r.json()["revenueShare"] == "15"


def test_get_license_failure_is_502(client, fake_contract):
    fake_contract.failures["getLicense"] = ConnectionError("relay down")
    assert client.get("/api/license/8").status_code == 502


def test_ip_licenses_relabeled(client, fake_contract):
    fake_contract.results["getIPLicenses"] = [1]
    fake_contract.results["getLicense"] = license_tuple

    r = client.get("/api/ip/1/licenses")

    assert r.status_code == 200
    assert r.json()[0]["royaltyPercentage"] == "15"
    assert r.json()[0]["startDate"] == "1700000100"


def test_owner_assets_fall_back_to_empty(client, fake_contract):
    fake_contract.failures["getOwnerIPs"] = ConnectionError("relay down")

    r = client.get(f"/api/owner/{OWNER}/assets")

    assert r.status_code == 200
    assert r.json() == []


def test_stats_never_fail(client, fake_contract):
    fake_contract.results["totalIPs"] = 5
    fake_contract.failures["totalLicenses"] = ConnectionError("relay down")

    r = client.get("/api/stats")

    assert r.json() == {"totalIPs": "5", "totalLicenses": "0"}


def test_register_ip(client, monkeypatch):
    seen = []

    def fake_register(ip_hash, metadata, token_uri, address):
        seen.append((ip_hash, metadata, token_uri, address))
        return {"tx_hash": "0xbeef", "ip_asset_id": 12, "block_number": 77, "explorer_url": "https://x/tx/0xbeef"}

    monkeypatch.setattr(server, "register_ip_with_hedera", fake_register)

    r = client.post("/api/ip/register", json={"ipHash": "QmHash", "metadata": {"name": "Song"}})

    assert r.status_code == 200
    assert r.json()["data"] == {
        "txHash": "0xbeef",
        "ipAssetId": "12",
        "blockNumber": "77",
        "explorerUrl": "https://x/tx/0xbeef",
    }
    assert seen == [("QmHash", '{"name": "Song"}', "", None)]


def test_register_ip_requires_hash_and_metadata(client):
    r = client.post("/api/ip/register", json={"ipHash": "QmHash"})
    assert r.status_code == 400


def test_register_ip_failure(client, monkeypatch):
    def fail(*args):
        raise ContractCallError("registerIP", "simulation reverted")

    monkeypatch.setattr(server, "register_ip_with_hedera", fail)

    r = client.post("/api/ip/register", json={"ipHash": "QmHash", "metadata": "{}"})

    assert r.status_code == 500
    assert r.json() == {"error": "IP registration failed", "details": "registerIP: simulation reverted"}


def test_health(wallet_env, client):
    r = client.get("/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["network"] == "testnet"
    assert body["chainId"] == 296
    assert body["contract"].lower() == CONTRACT_ADDRESS.lower()


def test_health_without_wallet_key_is_unhealthy(client):
    r = client.get("/health")

    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "unhealthy"
    assert "WALLET_PRIVATE_KEY" in body["error"]


def test_health_with_bad_contract_address_is_unhealthy(wallet_env, monkeypatch, client):
    monkeypatch.setenv("MODRED_IP_CONTRACT_ADDRESS", "0x1234")

    r = client.get("/health")

    assert r.status_code == 503
    assert r.json()["status"] == "unhealthy"
