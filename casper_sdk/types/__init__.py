"""
casper_sdk.types
================

Value types for building deploys:

- cl_type    : CLType descriptors (closed set of simple and composite types)
- cl_value   : CLValue typed values and the byte-exact decoder
- keys       : PublicKey and KeyAlgo
- uref       : URef unforgeable references
- signature  : algorithm-tagged Signature envelope
- executable : execution items (ModuleBytes, Transfer, stored contracts)
- deploy     : DeployHeader, Approval, Deploy
"""

from .cl_type import CLType, CLTypeTag
from .keys import KeyAlgo, PublicKey
from .uref import AccessRights, URef
from .cl_value import CLValue, decode_value
from .signature import Signature
from .executable import (
    ExecutableDeployItem,
    ModuleBytes,
    NamedArg,
    StoredContractByHash,
    StoredContractByName,
    StoredVersionedContractByHash,
    StoredVersionedContractByName,
    Transfer,
    runtime_args,
)

# deploy pulls in casper_sdk.encoding, which needs everything above.
from .deploy import Approval, Deploy, DeployHeader, ValidationResult

__all__ = [
    "CLType",
    "CLTypeTag",
    "KeyAlgo",
    "PublicKey",
    "AccessRights",
    "URef",
    "CLValue",
    "decode_value",
    "Signature",
    "ExecutableDeployItem",
    "ModuleBytes",
    "NamedArg",
    "StoredContractByHash",
    "StoredContractByName",
    "StoredVersionedContractByHash",
    "StoredVersionedContractByName",
    "Transfer",
    "runtime_args",
    "Approval",
    "Deploy",
    "DeployHeader",
    "ValidationResult",
]
