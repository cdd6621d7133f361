"""Helpers for deploying and calling contracts from async test code."""

from .calls import call_contract_method, call_contract_method_with_tx
from .deploy import (
    deploy_from_abi_and_bytecode,
    deploy_from_abi_and_bytecode_for_creator_tx_hash,
    deploy_from_private_key,
)
from .exceptions import (
    ArtifactNotFoundError,
    ContractHelperError,
    MissingPrivateKeyError,
    NoContractAddressError,
    Web3ConnectionError,
)
from .timing import wait_secs
from .web3_utils import init_web3, load_account, load_contract_artifact

__all__ = [
    'deploy_from_abi_and_bytecode',
    'deploy_from_abi_and_bytecode_for_creator_tx_hash',
    'deploy_from_private_key',
    'call_contract_method',
    'call_contract_method_with_tx',
    'wait_secs',
    'init_web3',
    'load_account',
    'load_contract_artifact',
    'ContractHelperError',
    'NoContractAddressError',
    'ArtifactNotFoundError',
    'MissingPrivateKeyError',
    'Web3ConnectionError',
]
