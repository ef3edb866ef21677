import itertools
from typing import Any, Dict, List, NamedTuple, Tuple

import pytest
from eth_utils import keccak, to_checksum_address
from ethpm_types.abi import ABIType, MethodABI

from untron_deployment.config import resolve_config
from untron_deployment.constants import (
    MOCK_AGGREGATION_ROUTER,
    MOCK_SP1_VERIFIER,
    MOCK_SPOKE_POOL,
    MOCK_USDT,
    PROXY,
    UNRESOLVED_ADDRESS,
    UNTRON_CORE,
)
from untron_deployment.deployer import Deployer


def make_address(n: int) -> str:
    return to_checksum_address(f"0x{n:040x}")


PRODUCTION_USDT = to_checksum_address("0x493257fD37EDB34451f62EDf8D2a0C418852bA4C")
PRODUCTION_SPOKE_POOL = to_checksum_address("0xE0B015E54d54fc84a6cB9B666099c46adE9335FF")
PRODUCTION_AGGREGATION_ROUTER = to_checksum_address("0x6fd4383cB451173D5f9304F041C7BCBf27d561fF")
PRODUCTION_SP1_VERIFIER = make_address(0x5151)

ADMIN = make_address(0xAD)
UNLIMITED_CREATOR = make_address(0xC4)
REGISTRAR = make_address(0x4E)
PRIVATE_KEY = "0x" + "11" * 32
VKEY = "0x" + "ab" * 32

ROLE_GETTERS = (
    "DEFAULT_ADMIN_ROLE",
    "UPGRADER_ROLE",
    "UNLIMITED_CREATOR_ROLE",
    "REGISTRAR_ROLE",
)


def role_id(getter: str) -> bytes:
    if getter == "DEFAULT_ADMIN_ROLE":
        return b"\x00" * 32
    return keccak(text=getter.replace("_ROLE", ""))


# ABI fixtures


def _inputs(*pairs: Tuple[str, str]) -> List[ABIType]:
    return [ABIType(name=name, type=type_) for name, type_ in pairs]


def _method(name: str, *pairs: Tuple[str, str]) -> MethodABI:
    return MethodABI(name=name, inputs=_inputs(*pairs), stateMutability="nonpayable")


UNTRON_METHODS = {
    "initialize": [
        _method(
            "initialize",
            ("spokePool", "address"),
            ("usdt", "address"),
            ("aggregationRouter", "address"),
        )
    ],
    "grantRole": [_method("grantRole", ("role", "bytes32"), ("account", "address"))],
    "revokeRole": [_method("revokeRole", ("role", "bytes32"), ("account", "address"))],
    "setUntronZKVariables": [
        _method("setUntronZKVariables", ("verifier", "address"), ("vkey", "bytes32"))
    ],
}


# Fake ape collaborators; every action lands in one shared, ordered log.


class Call(NamedTuple):
    kind: str
    contract: str
    name: str
    args: Tuple[Any, ...]


class FakeContractType(NamedTuple):
    name: str


class FakeConstructorABI(NamedTuple):
    inputs: List[ABIType]


class FakeConstructor(NamedTuple):
    abi: FakeConstructorABI


class FakeReceipt(NamedTuple):
    txn_hash: str


class FakeTransactionHandler:
    def __init__(self, contract: "FakeInstance", abis: List[MethodABI]):
        self.contract = contract
        self.abis = abis
        self._log = contract.log

    def __call__(self, *args, sender=None):
        name = self.abis[0].name
        self._log.append(Call("transact", self.contract.contract_type.name, name, args))
        assert sender is not None
        return FakeReceipt(txn_hash=f"0x{len(self._log):064x}")

    def encode_input(self, *args) -> bytes:
        name = self.abis[0].name
        self._log.append(Call("encode", self.contract.contract_type.name, name, args))
        words = [bytes.fromhex(arg[2:]).rjust(32, b"\x00") for arg in args]
        return b"\x8f\x15\xb6\xb5" + b"".join(words)


class FakeInstance:
    def __init__(self, container: "FakeContainer", address: str):
        self.container = container
        self.contract_type = container.contract_type
        self.address = address
        self.log = container.log

    def __getattr__(self, name):
        if name in ROLE_GETTERS:
            return lambda: role_id(name)
        if name in self.container.methods:
            return FakeTransactionHandler(self, self.container.methods[name])
        raise AttributeError(name)


class FakeContainer:
    def __init__(
        self,
        name: str,
        log: List[Call],
        constructor_inputs: List[ABIType] = None,
        methods: Dict[str, List[MethodABI]] = None,
    ):
        self.contract_type = FakeContractType(name=name)
        self.constructor = FakeConstructor(FakeConstructorABI(constructor_inputs or []))
        self.methods = methods or dict()
        self.log = log

    def at(self, address: str) -> FakeInstance:
        return FakeInstance(self, address)


class FakeAccount:
    def __init__(self, log: List[Call], address: str):
        self.address = address
        self.log = log
        self._addresses = (make_address(n) for n in itertools.count(0x1000))

    def deploy(self, container: FakeContainer, *args) -> FakeInstance:
        self.log.append(Call("deploy", container.contract_type.name, "constructor", args))
        return container.at(next(self._addresses))


@pytest.fixture
def call_log() -> List[Call]:
    return list()


@pytest.fixture
def artifacts(call_log):
    return {
        UNTRON_CORE: FakeContainer(UNTRON_CORE, call_log, methods=UNTRON_METHODS),
        PROXY: FakeContainer(
            PROXY,
            call_log,
            constructor_inputs=_inputs(("implementation", "address"), ("_data", "bytes")),
        ),
        MOCK_USDT: FakeContainer(MOCK_USDT, call_log),
        MOCK_SPOKE_POOL: FakeContainer(MOCK_SPOKE_POOL, call_log),
        MOCK_AGGREGATION_ROUTER: FakeContainer(MOCK_AGGREGATION_ROUTER, call_log),
        MOCK_SP1_VERIFIER: FakeContainer(MOCK_SP1_VERIFIER, call_log),
    }


@pytest.fixture
def deployer_account(call_log):
    return FakeAccount(call_log, address=make_address(0xDE))


@pytest.fixture
def deployer(deployer_account):
    return Deployer(deployer_account, autosign=True)


@pytest.fixture
def params():
    return {
        "networks": {
            "mainnet": {"uri": "https://mainnet.era.zksync.io", "chain_id": 324},
            "testnet": {"uri": "https://testnet.era.zksync.io", "chain_id": 280},
        },
        "manifest": {"filename": "deployment.json"},
        "constants": {
            "USDT": PRODUCTION_USDT,
            "SPOKE_POOL": PRODUCTION_SPOKE_POOL,
            "AGGREGATION_ROUTER": PRODUCTION_AGGREGATION_ROUTER,
            "SP1_VERIFIER": PRODUCTION_SP1_VERIFIER,
        },
    }


@pytest.fixture
def unresolved_params(params):
    params["constants"]["SP1_VERIFIER"] = UNRESOLVED_ADDRESS
    return params


@pytest.fixture
def environ():
    return {"PRIVATE_KEY": PRIVATE_KEY}


@pytest.fixture
def full_environ(environ):
    environ.update(
        {
            "ADMIN_ADDRESS": ADMIN,
            "UNLIMITED_CREATOR_ADDRESS": UNLIMITED_CREATOR,
            "REGISTRAR_ADDRESS": REGISTRAR,
            "SP1_VKEY": VKEY,
        }
    )
    return environ


@pytest.fixture
def make_config(params, environ):
    def _make_config(mainnet=False, mock=False, env=None):
        return resolve_config(
            mainnet=mainnet, mock=mock, environ=env if env is not None else environ, params=params
        )

    return _make_config


def deployed_names(log: List[Call]) -> List[str]:
    return [call.contract for call in log if call.kind == "deploy"]


def transactions(log: List[Call]) -> List[Call]:
    return [call for call in log if call.kind == "transact"]
