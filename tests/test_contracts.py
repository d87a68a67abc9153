import json

import pytest

from modred_ip import contracts
from modred_ip.errors import ConfigError


def test_packaged_abi_has_all_functions():
    names = {entry["name"] for entry in contracts.MODRED_IP_ABI}
    assert names == {
        "registerIP",
        "mintLicense",
        "payRevenue",
        "claimRoyalties",
        "getIPAsset",
        "getLicense",
        "totalIPs",
        "totalLicenses",
        "getOwnerIPs",
        "getIPLicenses",
    }
    pay_revenue = next(e for e in contracts.MODRED_IP_ABI if e["name"] == "payRevenue")
    assert pay_revenue["stateMutability"] == "payable"


def test_load_abi_accepts_hardhat_artifact(tmp_path):
    artifact = tmp_path / "ModredIP.json"
    artifact.write_text(json.dumps({"contractName": "ModredIP", "abi": contracts.MODRED_IP_ABI}))
    assert contracts.load_abi(artifact) == contracts.MODRED_IP_ABI


def test_load_abi_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="ABI not found"):
        contracts.load_abi(tmp_path / "nope.json")


def test_resolve_default_address():
    resolved = contracts.resolve_modred_ip_address()
    assert resolved.lower() == contracts.MODRED_IP_CONTRACT_ADDRESS.lower()


def test_resolve_override_wins(tmp_path):
    override = "0x" + "22" * 20
    assert contracts.resolve_modred_ip_address(override, str(tmp_path / "unused.json")).lower() == override


def test_resolve_from_ignition_output(tmp_path):
    deployed = tmp_path / "deployed_addresses.json"
    deployed.write_text(json.dumps({
        "ModredIPModule#ModredIP": "0x" + "33" * 20,
        "ModredIPModule#MockERC6551Registry": "0x" + "44" * 20,
    }))

    assert contracts.resolve_modred_ip_address(None, str(deployed)).lower() == "0x" + "33" * 20

    addresses = contracts.load_deployed_addresses(str(deployed))
    assert addresses["ERC6551_REGISTRY"].lower() == "0x" + "44" * 20
    assert addresses["ERC6551_ACCOUNT"] == contracts.CONTRACT_ADDRESSES["ERC6551_ACCOUNT"]


def test_resolve_missing_deployment_file(tmp_path):
    with pytest.raises(ConfigError, match="Deployment file not found"):
        contracts.resolve_modred_ip_address(None, str(tmp_path / "missing.json"))


def test_resolve_rejects_garbage():
    with pytest.raises(ConfigError, match="Invalid ModredIP contract address"):
        contracts.resolve_modred_ip_address("not-an-address")
