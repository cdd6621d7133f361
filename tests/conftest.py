"""Shared pytest fixtures for contract_helpers tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from hexbytes import HexBytes
from web3.datastructures import AttributeDict

# Private key 0x...01 and the address it derives to.
PRIVATE_KEY = "0x" + "0" * 63 + "1"
DEPLOYER = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"

CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
TX_HASH = HexBytes("0x" + "ab" * 32)
GAS = 250_000
CHAIN_ID = 31337

ABI = [
    {
        "inputs": [{"internalType": "string", "name": "_greeting", "type": "string"}],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    {
        "inputs": [],
        "name": "greet",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "string", "name": "_greeting", "type": "string"}],
        "name": "setGreeting",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]
BYTECODE = "0x6080604052348015600f57600080fd5b50"


def _unsigned_tx(to=None):
    """Build a fake for `build_transaction` that returns a signable legacy tx."""

    async def build_transaction(params):
        tx = {
            "data": BYTECODE,
            "value": 0,
            "gas": params["gas"],
            "gasPrice": 10**9,
            "nonce": params["nonce"],
            "chainId": CHAIN_ID,
        }
        if to:
            tx["to"] = to
        return tx

    return build_transaction


@pytest.fixture
def receipt() -> AttributeDict:
    return AttributeDict(
        {
            "transactionHash": TX_HASH,
            "blockNumber": 7,
            "contractAddress": CONTRACT_ADDRESS,
            "gasUsed": 180_000,
            "status": 1,
        }
    )


@pytest.fixture
def deployment() -> MagicMock:
    """Constructor call object returned by `contract.constructor(...)`."""
    deployment = MagicMock()
    deployment.estimate_gas = AsyncMock(return_value=GAS)
    deployment.transact = AsyncMock(return_value=TX_HASH)
    deployment.build_transaction = AsyncMock(side_effect=_unsigned_tx())
    return deployment


@pytest.fixture
def method() -> MagicMock:
    """Bound contract function returned by `contract.functions[name](...)`."""
    method = MagicMock()
    method.estimate_gas = AsyncMock(return_value=GAS)
    method.call = AsyncMock(return_value="Hello")
    method.transact = AsyncMock(return_value=TX_HASH)
    method.build_transaction = AsyncMock(side_effect=_unsigned_tx(to=CONTRACT_ADDRESS))
    return method


@pytest.fixture
def contract(deployment: MagicMock, method: MagicMock) -> MagicMock:
    contract = MagicMock()
    contract.constructor.return_value = deployment
    contract.functions.__getitem__.return_value = MagicMock(return_value=method)
    return contract


@pytest.fixture
def fake_w3(contract: MagicMock, receipt: AttributeDict) -> MagicMock:
    """An AsyncWeb3 stand-in backed by a deterministic chain."""
    w3 = MagicMock()
    w3.eth.contract.return_value = contract
    w3.eth.wait_for_transaction_receipt = AsyncMock(return_value=receipt)
    w3.eth.get_transaction_count = AsyncMock(return_value=3)
    w3.eth.send_raw_transaction = AsyncMock(return_value=TX_HASH)
    return w3
