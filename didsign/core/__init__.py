"""
Core primitives shared by the address codec and the document signer.

- Canonical: deterministic JSON for signed payloads
- Clock: timestamp sources
- Hashing: document and checksum hashes
- Errors: exception taxonomy
"""

from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .clock import SystemClock, FixedClock
from .hashing import document_hash, blake2b_256, blake2b_512
from .errors import (
    DidSignError,
    InvalidInputError,
    AddressError,
    MalformedAddressError,
    UnknownNetworkError,
    ChecksumMismatchError,
    InvalidSeedError,
    DocumentUnreadableError,
    SidecarIOError,
    SidecarFormatError,
)

__all__ = [
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "SystemClock",
    "FixedClock",
    "document_hash",
    "blake2b_256",
    "blake2b_512",
    "DidSignError",
    "InvalidInputError",
    "AddressError",
    "MalformedAddressError",
    "UnknownNetworkError",
    "ChecksumMismatchError",
    "InvalidSeedError",
    "DocumentUnreadableError",
    "SidecarIOError",
    "SidecarFormatError",
]
