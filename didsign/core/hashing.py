"""
Hash helpers shared by the codec, the key derivation and the signer.
"""

import hashlib


def document_hash(data: bytes) -> bytes:
    """
    Hash the exact document bytes.

    Args:
        data: Document contents as they exist on disk

    Returns:
        32-byte SHA-256 digest
    """
    return hashlib.sha256(data).digest()


def blake2b_512(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=64).digest()


def blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()
