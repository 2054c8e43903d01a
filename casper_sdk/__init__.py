"""
Casper deploy SDK for Python
Convenience exports for building, hashing and signing deploys.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import DeployConfig  # noqa: F401
from .errors import (  # noqa: F401
    CasperSdkError,
    DeserializationError,
    ListTypeMismatch,
    NotImplementedFeature,
    SignatureFormatError,
    ValidationError,
)

# Types (load before encoding; deploy depends on it)
from .types import (  # noqa: F401
    Approval,
    CLType,
    CLValue,
    Deploy,
    DeployHeader,
    KeyAlgo,
    PublicKey,
    Signature,
    URef,
    ValidationResult,
)

# Encoding
from .encoding import body_hash, header_hash  # noqa: F401

# Wallet
from .wallet import KeyPair, verify_signature  # noqa: F401

# Tx helpers
from .tx.build import (  # noqa: F401
    make_deploy,
    make_header,
    standard_payment,
    transfer,
)

__all__ = [
    "__version__",
    # Core
    "DeployConfig",
    "CasperSdkError", "ValidationError", "ListTypeMismatch",
    "DeserializationError", "SignatureFormatError", "NotImplementedFeature",
    # Types
    "CLType", "CLValue", "PublicKey", "KeyAlgo", "URef", "Signature",
    "DeployHeader", "Approval", "Deploy", "ValidationResult",
    # Encoding
    "body_hash", "header_hash",
    # Wallet
    "KeyPair", "verify_signature",
    # Tx
    "make_header", "make_deploy", "standard_payment", "transfer",
]
