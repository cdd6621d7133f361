"""Helpers for deploying contracts from an ABI and bytecode."""

import asyncio
import logging
from typing import Any, Sequence

from eth_typing import ChecksumAddress
from web3 import AsyncWeb3, Web3
from web3.types import TxReceipt

from .exceptions import MissingPrivateKeyError, NoContractAddressError
from .web3_utils import Sender, load_account, sender_address, submit_transaction, wait_for_receipt

logger = logging.getLogger(__name__)


def _contract_address(receipt: TxReceipt) -> ChecksumAddress:
    address = receipt.get('contractAddress')
    if not address:
        raise NoContractAddressError()
    return address


async def _prepare_deployment(w3: AsyncWeb3, abi: list, bytecode: str, sender: Sender, args: Sequence[Any] | None):
    contract = w3.eth.contract(abi=abi, bytecode=bytecode)
    deployment = contract.constructor(*(args or []))
    gas = await deployment.estimate_gas({'from': sender_address(sender)})
    logger.debug(f"Estimated deployment gas: {gas}")
    return deployment, gas


async def deploy_from_abi_and_bytecode(
    w3: AsyncWeb3, abi: list, bytecode: str, sender: Sender, args: Sequence[Any] | None = None
) -> ChecksumAddress:
    """
    Deploy a contract and return its address.

    `sender` is normally an account unlocked on the node. A LocalAccount is
    signed for locally instead.

    Raises:
        NoContractAddressError: If the receipt has no contract address
    """
    deployment, gas = await _prepare_deployment(w3, abi, bytecode, sender, args)
    tx_hash = await submit_transaction(w3, deployment, sender, gas)
    receipt = await wait_for_receipt(w3, tx_hash)
    address = _contract_address(receipt)
    logger.info(f"Contract deployed at {address}")
    return address


async def deploy_from_abi_and_bytecode_for_creator_tx_hash(
    w3: AsyncWeb3, abi: list, bytecode: str, sender: Sender, args: Sequence[Any] | None = None
) -> tuple[ChecksumAddress, str]:
    """
    Deploy a contract and return its address together with the creation tx hash.

    The submission runs once and is awaited by two waits, one for the
    transaction hash and one for the receipt. Both must succeed. The first
    failure is raised and the other wait is cancelled.

    Returns:
        Tuple of (contract_address, tx_hash) with tx_hash as a 0x-prefixed hex string

    Raises:
        NoContractAddressError: If the receipt has no contract address
    """
    deployment, gas = await _prepare_deployment(w3, abi, bytecode, sender, args)
    submission = asyncio.ensure_future(submit_transaction(w3, deployment, sender, gas))

    async def tx_hash_wait() -> str:
        return Web3.to_hex(await submission)

    async def contract_address_wait() -> ChecksumAddress:
        receipt = await wait_for_receipt(w3, await submission)
        return _contract_address(receipt)

    waits = [asyncio.ensure_future(contract_address_wait()), asyncio.ensure_future(tx_hash_wait())]
    try:
        address, tx_hash = await asyncio.gather(*waits)
    except BaseException:
        for wait in waits:
            wait.cancel()
        submission.cancel()
        raise

    logger.info(f"Contract deployed at {address} by tx {tx_hash}")
    return address, tx_hash


async def deploy_from_private_key(
    w3: AsyncWeb3, abi: list, bytecode: str, private_key: str, args: Sequence[Any] | None = None
) -> ChecksumAddress:
    """
    Deploy a contract from an external account, signing with its raw private key.

    Raises:
        MissingPrivateKeyError: If `private_key` is empty. PRIVATE_KEY is never used here.
    """
    if not private_key:
        raise MissingPrivateKeyError("deploy_from_private_key requires a private key")
    account = load_account(private_key)
    logger.info(f"Deploying from external account {account.address}")
    return await deploy_from_abi_and_bytecode(w3, abi, bytecode, account, args)
