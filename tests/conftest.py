from types import SimpleNamespace

import pytest

from modred_ip import blockchain_client, config
from modred_ip.contract_service import ContractService

# Hardhat's first default account
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

CONTRACT_ADDRESS = "0xe3Cf8C99E10C1a7138520391bef6dddC61Aa0b91"
TX_HASH_BYTES = bytes.fromhex("ab" * 32)
TX_HASH = "0x" + "ab" * 32

ENV_VARS = [
    "WALLET_PRIVATE_KEY",
    "HEDERA_NETWORK",
    "RPC_PROVIDER_URL",
    "MODRED_IP_CONTRACT_ADDRESS",
    "DEPLOYED_ADDRESSES_PATH",
    "GAS_LIMIT",
    "TX_RECEIPT_TIMEOUT",
]


class FakeContractFunction:
    def __init__(self, contract, fn_name, args):
        self.contract = contract
        self.fn_name = fn_name
        self.args = args

    def call(self, params=None):
        self.contract.calls.append((self.fn_name, self.args, params))
        if self.fn_name in self.contract.failures:
            raise self.contract.failures[self.fn_name]
        result = self.contract.results.get(self.fn_name)
        return result(*self.args) if callable(result) else result

    def build_transaction(self, params):
        tx = {"to": self.contract.address, "data": f"0x{self.fn_name}", **params}
        self.contract.built.append((self.fn_name, self.args, tx))
        return tx


class FakeFunctions:
    def __init__(self, contract):
        self._contract = contract

    def __getattr__(self, name):
        return lambda *args: FakeContractFunction(self._contract, name, args)


class FakeContract:
    def __init__(self, address=CONTRACT_ADDRESS):
        self.address = address
        self.results = {}
        self.failures = {}
        self.calls = []
        self.built = []
        self.functions = FakeFunctions(self)


class FakeEth:
    def __init__(self):
        self.chain_id = 296
        self.gas_price = 450_000_000_000
        self.nonce = 7
        self.sent = []
        self.receipt = {"status": 1, "blockNumber": 123456, "gasUsed": 210000, "logs": []}
        self.receipt_error = None

    def get_transaction_count(self, address, block_identifier="latest"):
        return self.nonce

    def send_raw_transaction(self, raw):
        self.sent.append(raw)
        return TX_HASH_BYTES

    def wait_for_transaction_receipt(self, tx_hash, timeout=120):
        if self.receipt_error is not None:
            raise self.receipt_error
        return self.receipt


class FakeWeb3:
    def __init__(self, connected=True):
        self.eth = FakeEth()
        self._connected = connected

    def is_connected(self):
        return self._connected


class FakeAccount:
    address = TEST_ADDRESS

    def __init__(self):
        self.signed = []

    def sign_transaction(self, tx):
        self.signed.append(tx)
        return SimpleNamespace(raw_transaction=b"signed-" + str(tx["nonce"]).encode())


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.reset_settings()
    blockchain_client.reset_clients()
    yield
    config.reset_settings()
    blockchain_client.reset_clients()


@pytest.fixture
def wallet_env(monkeypatch):
    monkeypatch.setenv("WALLET_PRIVATE_KEY", TEST_PRIVATE_KEY)
    config.reset_settings()


@pytest.fixture
def fake_w3():
    return FakeWeb3()


@pytest.fixture
def fake_contract():
    return FakeContract()


@pytest.fixture
def fake_account():
    return FakeAccount()


@pytest.fixture
def service(fake_w3, fake_contract, fake_account):
    return ContractService(
        w3=fake_w3,
        contract=fake_contract,
        account=fake_account,
        gas_limit=3_000_000,
        receipt_timeout=5,
    )
