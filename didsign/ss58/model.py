"""
Address value types.

Addresses are only constructed by the codec, so `text` is always the
canonical encoding of the other fields.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .registry import NetworkPrefix


@dataclass(frozen=True)
class Address:
    """
    Decoded SS58 address.

    Fields:
        network: Registry entry for the prefix
        public_key: 32-byte public key
        checksum: Trailing checksum bytes (2 for 32-byte keys)
        text: Base-58 address string
    """
    network: NetworkPrefix
    public_key: bytes
    checksum: bytes
    text: str

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> Dict[str, Any]:
        """Display form (hex byte fields) for JSON output."""
        return {
            "address": self.text,
            "network": self.network.name,
            "prefix": self.network.value,
            "public_key": self.public_key.hex(),
            "checksum": self.checksum.hex(),
        }


@dataclass(frozen=True)
class AddressValidation:
    """
    Granular validation outcome.

    Distinguishes "not an address at all" (is_valid_format False) from
    "well-formed but tampered or mistyped" (is_valid_checksum False).
    """
    is_valid_format: bool
    is_valid_checksum: bool
    network: Optional[NetworkPrefix] = None
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.is_valid_format and self.is_valid_checksum and self.network is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid_format": self.is_valid_format,
            "is_valid_checksum": self.is_valid_checksum,
            "is_valid": self.is_valid,
            "network": self.network.name if self.network else None,
            "error": self.error,
        }
