"""Exception classes for contract_helpers."""


class ContractHelperError(Exception):
    """Base exception for contract helper errors."""

    pass


class NoContractAddressError(ContractHelperError):
    """Raised when a deployment receipt carries no contract address."""

    def __init__(self, message: str = "No contract address in receipt"):
        super().__init__(message)


class ArtifactNotFoundError(ContractHelperError, FileNotFoundError):
    """Raised when no compiled artifact exists for a contract name."""

    pass


class MissingPrivateKeyError(ContractHelperError, ValueError):
    """Raised when no private key was given and PRIVATE_KEY is unset."""

    pass


class Web3ConnectionError(ContractHelperError, ConnectionError):
    """Raised when the RPC provider cannot be reached."""

    pass
