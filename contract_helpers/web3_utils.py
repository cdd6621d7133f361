import os
import json
import logging
from pathlib import Path
from typing import Any, Union

from aiohttp import ClientTimeout
from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from tenacity import AsyncRetrying, RetryError, stop_after_attempt, wait_fixed
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.types import TxReceipt

from .exceptions import ArtifactNotFoundError, MissingPrivateKeyError, Web3ConnectionError

# --- Logging Setup ---
logger = logging.getLogger(__name__)
if not logger.hasHandlers():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# --- Load Environment Variables ---
env_path = Path.cwd() / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    logger.debug(f".env file not found at {env_path}, using process environment only")



def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default


RPC_URL = os.getenv('RPC_URL', 'http://127.0.0.1:8545')
PRIVATE_KEY = os.getenv('PRIVATE_KEY')
ARTIFACTS_DIR = Path(os.getenv('ARTIFACTS_DIR', 'artifacts'))
TX_RECEIPT_TIMEOUT = _env_float('TX_RECEIPT_TIMEOUT', 120.0)

# An address the node can sign for, or a locally held key.
Sender = Union[str, LocalAccount]

# --- Web3 Initialization ---
w3 = None
w3_url = None


async def init_web3(rpc_url: str | None = None, retries: int = 3, delay: float = 2) -> AsyncWeb3:
    """
    Connect to the RPC provider, retrying the connection, and cache the client.

    The cached client is reused when no URL is given or the URL matches the
    cached one. A different URL connects again and replaces the cache.
    """
    global w3, w3_url
    if w3 and (rpc_url is None or rpc_url == w3_url):
        return w3

    url = rpc_url or RPC_URL
    try:
        async for attempt in AsyncRetrying(stop=stop_after_attempt(retries), wait=wait_fixed(delay)):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                logger.info(f"Attempting to connect to Web3 provider at {url} (Attempt {attempt_number}/{retries})...")
                client = AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={'timeout': ClientTimeout(total=60)}))
                if not await client.is_connected():
                    raise Web3ConnectionError(f"Provider at {url} is not responding")
                chain_id = await client.eth.chain_id
    except RetryError as e:
        logger.critical("Failed to connect to Web3 provider after multiple retries.")
        raise Web3ConnectionError(f"Could not connect to {url} after {retries} attempts") from e.last_attempt.exception()

    logger.info(f"Successfully connected to network via {url} - Chain ID: {chain_id}")
    w3 = client
    w3_url = url
    return w3


def load_contract_artifact(contract_name: str, artifacts_dir: Path | str | None = None) -> tuple[list[dict[str, Any]], str]:
    """
    Load a contract's ABI and bytecode from a Hardhat artifacts directory.

    Args:
        contract_name: Contract name, e.g. "Greeter"
        artifacts_dir: Artifacts root (defaults to ARTIFACTS_DIR)

    Returns:
        Tuple of (abi, bytecode)

    Raises:
        ArtifactNotFoundError: If no readable artifact with an ABI exists
    """
    base_path = Path(artifacts_dir) if artifacts_dir is not None else ARTIFACTS_DIR
    file_name = f'{contract_name}.sol/{contract_name}.json'
    possible_paths = [
        base_path / 'contracts' / file_name,
        base_path / 'contracts' / 'interfaces' / file_name,
    ]
    possible_paths.extend(sorted(base_path.glob(f'**/{file_name}')))

    for path in possible_paths:
        if not path.exists():
            continue
        with open(path) as f:
            try:
                contract_json = json.load(f)
            except json.JSONDecodeError:
                logger.warning(f"Skipping unreadable artifact {path}")
                continue
        if 'abi' not in contract_json:
            continue
        logger.debug(f"Loaded artifact for {contract_name} from {path}")
        return contract_json['abi'], contract_json.get('bytecode', '0x')

    raise ArtifactNotFoundError(f"Artifact not found for {contract_name} under {base_path}")


def load_account(private_key: str | None = None) -> LocalAccount:
    """Derive a local signing account from a raw private key (defaults to PRIVATE_KEY)."""
    key = private_key or PRIVATE_KEY
    if not key:
        raise MissingPrivateKeyError("No private key given and PRIVATE_KEY is not set")
    return Account.from_key(key)


def sender_address(sender: Sender) -> ChecksumAddress:
    if isinstance(sender, LocalAccount):
        return sender.address
    return Web3.to_checksum_address(sender)


async def submit_transaction(w3: AsyncWeb3, transaction: Any, sender: Sender, gas: int) -> HexBytes:
    """
    Submit a constructor or contract function call as a transaction.

    Unlocked node accounts go through `transact`. A LocalAccount sender is
    signed locally and broadcast with `send_raw_transaction`.

    Returns:
        The transaction hash
    """
    address = sender_address(sender)
    if isinstance(sender, LocalAccount):
        nonce = await w3.eth.get_transaction_count(address, 'pending')
        tx_params = await transaction.build_transaction({'from': address, 'gas': gas, 'nonce': nonce})
        signed_tx = sender.sign_transaction(tx_params)
        tx_hash = await w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    else:
        tx_hash = await transaction.transact({'from': address, 'gas': gas})

    logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
    return tx_hash


async def wait_for_receipt(w3: AsyncWeb3, tx_hash: HexBytes) -> TxReceipt:
    receipt = await w3.eth.wait_for_transaction_receipt(tx_hash, timeout=TX_RECEIPT_TIMEOUT)
    logger.info(f"Transaction confirmed in block: {receipt['blockNumber']}, Status: {receipt['status']}")
    return receipt
