"""
SS58 address codec.

Provides:
- NetworkPrefix registry (read-only, process-wide)
- encode / decode / validate / convert
- Multi-network helpers
"""

from .registry import (
    NetworkPrefix,
    NetworkRegistry,
    REGISTRY,
    IDENTITY_NETWORK,
    POLKADOT,
    KUSAMA,
    KILT,
    SUBSTRATE,
    MOONBEAM,
    get_network,
    find_by_value,
    supported_networks,
)
from .model import Address, AddressValidation
from .codec import (
    encode,
    decode,
    validate,
    convert,
    compute_checksum,
    prefix_bytes,
    public_key_from_address,
    encode_for_networks,
    is_from_network,
    validate_many,
)

__all__ = [
    "NetworkPrefix",
    "NetworkRegistry",
    "REGISTRY",
    "IDENTITY_NETWORK",
    "POLKADOT",
    "KUSAMA",
    "KILT",
    "SUBSTRATE",
    "MOONBEAM",
    "get_network",
    "find_by_value",
    "supported_networks",
    "Address",
    "AddressValidation",
    "encode",
    "decode",
    "validate",
    "convert",
    "compute_checksum",
    "prefix_bytes",
    "public_key_from_address",
    "encode_for_networks",
    "is_from_network",
    "validate_many",
]
