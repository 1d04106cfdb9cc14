"""
Substrate derivation paths.

A secret URI looks like:  <phrase>//hard/soft///password

- "//x" is a hard junction (child cannot be linked back to the parent key)
- "/x" is a soft junction
- "///x" is the BIP-39 password, not a junction

Junction chain codes follow the Substrate rules: numbers are u64
little-endian, anything else is SCALE-encoded as a string; both are padded
to 32 bytes, or blake2b-256 hashed when longer.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.errors import InvalidInputError
from ..core.hashing import blake2b_256

JUNCTION_ID_LEN = 32
RE_JUNCTION = re.compile(r"(//?)([^/]+)")

DID_AUTHENTICATION_PATH = "//did//0"
DID_ASSERTION_PATH = "//did//1"
DID_DELEGATION_PATH = "//did//2"


def _scale_compact_len(length: int) -> bytes:
    """SCALE compact encoding of a length prefix."""
    if length < 1 << 6:
        return bytes([length << 2])
    if length < 1 << 14:
        return ((length << 2) | 0b01).to_bytes(2, "little")
    if length < 1 << 30:
        return ((length << 2) | 0b10).to_bytes(4, "little")
    raise InvalidInputError("Junction value too long")


def scale_encode_str(value: str) -> bytes:
    data = value.encode("utf-8")
    return _scale_compact_len(len(data)) + data


@dataclass(frozen=True)
class DeriveJunction:
    """
    One derivation step.

    Fields:
        chain_code: 32-byte chain code
        is_hard: Hard (//) or soft (/) junction
    """
    chain_code: bytes
    is_hard: bool = False

    @classmethod
    def from_segment(cls, segment: str, is_hard: bool = False) -> "DeriveJunction":
        if segment.isdigit() and int(segment) < 1 << 64:
            encoded = int(segment).to_bytes(8, "little")
        else:
            encoded = scale_encode_str(segment)

        if len(encoded) > JUNCTION_ID_LEN:
            chain_code = blake2b_256(encoded)
        else:
            chain_code = encoded.ljust(JUNCTION_ID_LEN, b"\x00")
        return cls(chain_code=chain_code, is_hard=is_hard)


def parse_derivation_path(path: str) -> List[DeriveJunction]:
    """
    Parse "//did//0" style paths into junctions.

    Raises:
        InvalidInputError: If the path contains anything but junctions
    """
    if not path:
        return []

    parts = RE_JUNCTION.findall(path)
    rebuilt = "".join(sep + value for sep, value in parts)
    if rebuilt != path:
        raise InvalidInputError(f"Invalid derivation path: {path!r}")

    return [DeriveJunction.from_segment(value, is_hard=(sep == "//")) for sep, value in parts]


def is_valid_path(path: str) -> bool:
    try:
        parse_derivation_path(path)
        return True
    except InvalidInputError:
        return False


def split_secret_uri(uri: str) -> Tuple[str, str, Optional[str]]:
    """
    Split a secret URI into (phrase, path, password).

    Example:
        split_secret_uri("word ... word//did//0///pw") -> ("word ... word", "//did//0", "pw")
    """
    password = None
    if "///" in uri:
        uri, password = uri.split("///", 1)

    index = uri.find("/")
    if index == -1:
        return uri.strip(), "", password
    return uri[:index].strip(), uri[index:], password
