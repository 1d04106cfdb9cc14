"""
Exception types for the address codec and document signer.

Verification outcomes (tampered document, bad signature) are not exceptions;
they are returned as VerificationVerdict values.
"""


class DidSignError(Exception):
    """Base class for all didsign errors."""
    pass


class InvalidInputError(DidSignError, ValueError):
    """Raised when a key, path or document is malformed before any crypto runs."""
    pass


class AddressError(DidSignError, ValueError):
    """Base class for address-level failures."""
    pass


class MalformedAddressError(AddressError):
    """Raised when an address is not valid base-58 or has an impossible length."""
    pass


class UnknownNetworkError(AddressError):
    """Raised when an address prefix or network name is not in the registry."""
    pass


class ChecksumMismatchError(AddressError):
    """Raised when the trailing checksum does not match prefix + public key."""
    pass


class InvalidSeedError(DidSignError, ValueError):
    """Raised when a mnemonic fails BIP-39 checksum validation."""
    pass


class DocumentUnreadableError(DidSignError):
    """Raised when document bytes are empty or the document cannot be read."""
    pass


class SidecarIOError(DidSignError, OSError):
    """Raised when a sidecar file cannot be written, read or removed."""
    pass


class SidecarFormatError(DidSignError, ValueError):
    """Raised when a sidecar file does not parse into a signature record."""
    pass
