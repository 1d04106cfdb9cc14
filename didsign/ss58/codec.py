"""
SS58 address encoding, decoding, validation and network conversion.

Wire format:
    base58( prefix || public_key || checksum )

- prefix: 1 byte for values < 64, otherwise 2 bytes (SS58 two-byte form)
- public_key: 32 bytes
- checksum: first 2 bytes of blake2b-512(b"SS58PRE" || prefix || public_key)
"""

from typing import Dict, Iterable, Tuple, Union

import base58

from ..core.errors import (
    AddressError,
    ChecksumMismatchError,
    InvalidInputError,
    MalformedAddressError,
    UnknownNetworkError,
)
from ..core.hashing import blake2b_512
from .model import Address, AddressValidation
from .registry import REGISTRY, RESERVED_PREFIXES, NetworkPrefix

PUBLIC_KEY_LENGTH = 32
CHECKSUM_LENGTH = 2
CHECKSUM_PREFIX = b"SS58PRE"

NetworkLike = Union[str, int, NetworkPrefix]


def prefix_bytes(value: int) -> bytes:
    """
    Encode a numeric SS58 prefix.

    Values below 64 take one byte. Larger values (up to 16383) use the
    two-byte form whose first byte has bit 6 set.
    """
    if value < 64:
        return bytes([value])
    return bytes(
        [
            ((value & 0b0000_0000_1111_1100) >> 2) | 0b0100_0000,
            (value >> 8) | ((value & 0b0000_0000_0000_0011) << 6),
        ]
    )


def _parse_prefix(raw: bytes) -> Tuple[int, int]:
    """Return (prefix_value, prefix_length) from the leading address bytes."""
    first = raw[0]
    if first < 64:
        return first, 1
    if first < 128:
        if len(raw) < 2:
            raise MalformedAddressError("Address too short for a two-byte prefix")
        second = raw[1]
        value = ((first & 0b0011_1111) << 2) | (second >> 6) | ((second & 0b0011_1111) << 8)
        return value, 2
    raise MalformedAddressError(f"Invalid SS58 prefix byte: {first}")


def compute_checksum(payload: bytes) -> bytes:
    """Checksum over prefix || public_key."""
    return blake2b_512(CHECKSUM_PREFIX + payload)[:CHECKSUM_LENGTH]


def _resolve(network: NetworkLike) -> NetworkPrefix:
    return REGISTRY.get(network)


def encode(public_key: bytes, network: NetworkLike) -> Address:
    """
    Encode a public key as an SS58 address.

    Args:
        public_key: 32-byte public key
        network: NetworkPrefix, registered name, or numeric prefix

    Returns:
        Fully populated Address

    Raises:
        InvalidInputError: If public_key is not exactly 32 bytes
        UnknownNetworkError: If network is not registered
    """
    if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != PUBLIC_KEY_LENGTH:
        size = len(public_key) if isinstance(public_key, (bytes, bytearray)) else type(public_key).__name__
        raise InvalidInputError(f"Public key must be {PUBLIC_KEY_LENGTH} bytes, got {size}")

    network = _resolve(network)
    key = bytes(public_key)
    payload = prefix_bytes(network.value) + key
    checksum = compute_checksum(payload)
    text = base58.b58encode(payload + checksum).decode("ascii")

    return Address(network=network, public_key=key, checksum=checksum, text=text)


def _split(address_text: str) -> Tuple[int, bytes, bytes, bytes]:
    """
    Base-58 decode and split into (prefix_value, prefix, public_key, checksum).

    Raises:
        MalformedAddressError: On bad alphabet, bad prefix byte or wrong length
    """
    if not isinstance(address_text, str) or not address_text:
        raise MalformedAddressError("Address must be a non-empty string")
    if address_text != address_text.strip() or " " in address_text:
        raise MalformedAddressError("Address must not contain whitespace")

    try:
        raw = base58.b58decode(address_text)
    except ValueError as ex:
        raise MalformedAddressError(f"Invalid base-58 address: {ex}") from ex

    if not raw:
        raise MalformedAddressError("Address decodes to zero bytes")

    value, prefix_len = _parse_prefix(raw)
    expected = prefix_len + PUBLIC_KEY_LENGTH + CHECKSUM_LENGTH
    if len(raw) != expected:
        raise MalformedAddressError(
            f"Invalid address length: {len(raw)} bytes (expected {expected})"
        )

    prefix = raw[:prefix_len]
    public_key = raw[prefix_len : prefix_len + PUBLIC_KEY_LENGTH]
    checksum = raw[prefix_len + PUBLIC_KEY_LENGTH :]
    return value, prefix, public_key, checksum


def decode(address_text: str) -> Address:
    """
    Decode and fully validate an SS58 address.

    Raises:
        MalformedAddressError: Not base-58, or impossible byte length
        UnknownNetworkError: Prefix not in the registry (including reserved 46/47)
        ChecksumMismatchError: Checksum does not match prefix + public key
    """
    value, prefix, public_key, checksum = _split(address_text)

    if value in RESERVED_PREFIXES:
        raise UnknownNetworkError(f"SS58 prefix {value} is reserved")
    network = REGISTRY.find_by_value(value)
    if network is None:
        raise UnknownNetworkError(f"Unknown SS58 prefix: {value}")

    expected = compute_checksum(prefix + public_key)
    if expected != checksum:
        raise ChecksumMismatchError(
            f"Invalid checksum: expected {expected.hex()}, got {checksum.hex()}"
        )

    return Address(network=network, public_key=public_key, checksum=checksum, text=address_text)


def validate(address_text: str) -> AddressValidation:
    """
    Validate an address without raising.

    Returns:
        AddressValidation with format, checksum and network outcomes
    """
    try:
        value, prefix, public_key, checksum = _split(address_text)
    except MalformedAddressError as ex:
        return AddressValidation(is_valid_format=False, is_valid_checksum=False, error=str(ex))

    checksum_ok = compute_checksum(prefix + public_key) == checksum
    network = REGISTRY.find_by_value(value)

    error = None
    if not checksum_ok:
        error = "Invalid checksum"
    elif network is None:
        error = f"Unknown SS58 prefix: {value}"

    return AddressValidation(
        is_valid_format=True,
        is_valid_checksum=checksum_ok,
        network=network,
        error=error,
    )


def convert(address_text: str, target_network: NetworkLike) -> Address:
    """
    Re-encode an address's public key under another network.

    Raises:
        Whatever decode() raises for an invalid input address
    """
    target = _resolve(target_network)
    source = decode(address_text)
    return encode(source.public_key, target)


def public_key_from_address(address_text: str) -> bytes:
    return decode(address_text).public_key


def encode_for_networks(public_key: bytes, networks: Iterable[NetworkLike]) -> Dict[str, Address]:
    """Encode one public key for several networks, keyed by network name."""
    result = {}
    for network in networks:
        address = encode(public_key, network)
        result[address.network.name] = address
    return result


def is_from_network(address_text: str, network: NetworkLike) -> bool:
    """True when the address decodes cleanly and carries the given network prefix."""
    try:
        return decode(address_text).network == _resolve(network)
    except AddressError:
        return False


def validate_many(addresses: Iterable[str]) -> Dict[str, AddressValidation]:
    return {address: validate(address) for address in addresses}
