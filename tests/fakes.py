from itertools import count
from types import SimpleNamespace
from typing import Any, Dict, List, NamedTuple

from eth_utils import to_checksum_address
from ethpm_types.abi import ABIType, ConstructorABI, MethodABI

from deployment.constants import PROXY_CONTRACT_NAME


def fake_address(number: int) -> str:
    return to_checksum_address(f"0x{number:040x}")


DEPLOYER_ADDRESS = fake_address(0xD3910)

GRANT_MINT_AND_BURN_ROLES_ABI = MethodABI(
    type="function",
    name="grantMintAndBurnRoles",
    stateMutability="nonpayable",
    inputs=[ABIType(name="burnAndMinter", type="address")],
    outputs=[],
)

POOL_INPUTS = [
    ABIType(name="token", type="address"),
    ABIType(name="allowlist", type="address[]"),
    ABIType(name="rmnProxy", type="address"),
]

CONSTRUCTOR_INPUTS = {
    PROXY_CONTRACT_NAME: [
        ABIType(name="implementation", type="address"),
        ABIType(name="_data", type="bytes"),
    ],
    "BurnMintTokenPool": POOL_INPUTS + [ABIType(name="router", type="address")],
    "LockReleaseTokenPool": POOL_INPUTS
    + [ABIType(name="acceptLiquidity", type="bool"), ABIType(name="router", type="address")],
}


class FakeReceipt:
    def __init__(self, txn_hash: str):
        self.txn_hash = txn_hash
        self.confirmation_waits = 0

    def await_confirmations(self):
        self.confirmation_waits += 1
        return self


class Transaction(NamedTuple):
    contract_name: str
    address: str
    method: str
    args: tuple
    kwargs: Dict[str, Any]
    receipt: FakeReceipt


class FakeTransactionHandler:
    def __init__(self, contract, abi: MethodABI, transactions: List[Transaction]):
        self.contract = contract
        self.abis = [abi]
        self._transactions = transactions

    def __str__(self):
        return self.abis[0].name

    def __call__(self, *args, sender=None, **kwargs):
        receipt = FakeReceipt(txn_hash=f"0x{len(self._transactions) + 1:064x}")
        self._transactions.append(
            Transaction(
                contract_name=self.contract.contract_type.name,
                address=self.contract.address,
                method=self.abis[0].name,
                args=args,
                kwargs=dict(kwargs, sender=sender),
                receipt=receipt,
            )
        )
        return receipt


class FakeInitializer:
    def encode_input(self, admin):
        return b"\xc4\xd6\x6d\xe8" + bytes.fromhex(admin[2:]).rjust(32, b"\x00")


class FakeContractInstance:
    def __init__(self, container: "FakeContainer", address: str):
        self.contract_type = container.contract_type
        self.address = address
        self.receipt = None
        self.initialize = FakeInitializer()
        self.grantMintAndBurnRoles = FakeTransactionHandler(
            contract=self, abi=GRANT_MINT_AND_BURN_ROLES_ABI, transactions=container.transactions
        )


class FakeContainer:
    def __init__(self, name: str):
        self.contract_type = SimpleNamespace(name=name)
        self.constructor = SimpleNamespace(
            abi=ConstructorABI(type="constructor", inputs=CONSTRUCTOR_INPUTS.get(name, []))
        )
        self.transactions: List[Transaction] = list()
        self.fail_deployment = False

    def at(self, address: str) -> FakeContractInstance:
        return FakeContractInstance(self, address)


class Deployment(NamedTuple):
    contract_name: str
    args: List[Any]
    kwargs: Dict[str, Any]
    instance: FakeContractInstance


class FakeAccount:
    """Stands in for an ape account; deployments are recorded, nothing is sent."""

    def __init__(self, address: str = DEPLOYER_ADDRESS):
        self.address = address
        self.autosign = None
        self.deployments: List[Deployment] = list()
        self._addresses = count(0xA0000)

    def set_autosign(self, enabled: bool):
        self.autosign = enabled

    def deploy(self, container: FakeContainer, *args, **kwargs) -> FakeContractInstance:
        if container.fail_deployment:
            raise RuntimeError(f"{container.contract_type.name} deployment reverted")
        instance = container.at(fake_address(next(self._addresses)))
        instance.receipt = FakeReceipt(txn_hash=f"0x{len(self.deployments) + 1:064x}")
        self.deployments.append(
            Deployment(
                contract_name=container.contract_type.name,
                args=list(args),
                kwargs=kwargs,
                instance=instance,
            )
        )
        return instance


class FakeExplorer:
    def __init__(self, error: Exception = None):
        self.error = error
        self.published: List[str] = list()

    def publish_contract(self, address):
        self.published.append(address)
        if self.error:
            raise self.error


class LogRecorder:
    def __init__(self):
        self.records = list()

    def _log(self, level):
        return lambda message: self.records.append((level, message))

    def __getattr__(self, level):
        return self._log(level)

    def levels(self):
        return [level for level, _ in self.records]


