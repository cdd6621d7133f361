import logging
from typing import Any, Sequence

from web3 import AsyncWeb3, Web3
from web3.types import TxReceipt

from .web3_utils import Sender, sender_address, submit_transaction, wait_for_receipt

logger = logging.getLogger(__name__)


def _bind_method(w3: AsyncWeb3, abi: list, contract_address: str, method_name: str, args: Sequence[Any]):
    contract = w3.eth.contract(address=Web3.to_checksum_address(contract_address), abi=abi)
    return contract.functions[method_name](*args)


async def call_contract_method(
    w3: AsyncWeb3, abi: list, contract_address: str, method_name: str, sender: Sender, args: Sequence[Any]
) -> Any:
    """Simulate a method with eth_call. Nothing is broadcast and no state changes."""
    method = _bind_method(w3, abi, contract_address, method_name, args)
    address = sender_address(sender)
    gas = await method.estimate_gas({'from': address})
    result = await method.call({'from': address, 'gas': gas})
    logger.debug(f"{method_name} at {contract_address} returned {result!r}")
    return result


async def call_contract_method_with_tx(
    w3: AsyncWeb3, abi: list, contract_address: str, method_name: str, sender: Sender, args: Sequence[Any]
) -> TxReceipt:
    """Send a state-changing transaction calling `method_name` and return its receipt."""
    method = _bind_method(w3, abi, contract_address, method_name, args)
    gas = await method.estimate_gas({'from': sender_address(sender)})
    logger.debug(f"Estimated gas for {method_name}: {gas}")
    tx_hash = await submit_transaction(w3, method, sender, gas)
    return await wait_for_receipt(w3, tx_hash)
