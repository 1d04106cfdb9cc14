"""
BIP-39 mnemonic handling.

Substrate expands a mnemonic into a 32-byte "mini secret" (PBKDF2 over the
mnemonic entropy, not over the phrase text), which seeds both Sr25519 and
Ed25519 keypairs.
"""

from bip39 import bip39_generate, bip39_to_mini_secret, bip39_validate

from ..core.errors import InvalidInputError, InvalidSeedError

VALID_WORD_COUNTS = (12, 15, 18, 21, 24)
LANGUAGE_CODE = "en"


def normalize_mnemonic(phrase: str) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join(phrase.strip().lower().split())


def mnemonic_word_count(phrase: str) -> int:
    return len(normalize_mnemonic(phrase).split())


def validate_mnemonic(phrase: str) -> bool:
    """
    Check word count and BIP-39 checksum.

    Returns:
        True if the phrase is a valid English BIP-39 mnemonic
    """
    if not isinstance(phrase, str):
        return False
    normalized = normalize_mnemonic(phrase)
    if len(normalized.split()) not in VALID_WORD_COUNTS:
        return False
    return bool(bip39_validate(normalized, LANGUAGE_CODE))


def mnemonic_to_mini_secret(phrase: str, password: str = "") -> bytes:
    """
    Expand a mnemonic into the 32-byte Substrate mini secret.

    Raises:
        InvalidSeedError: If the phrase fails BIP-39 validation
    """
    if not validate_mnemonic(phrase):
        raise InvalidSeedError("Mnemonic failed BIP-39 checksum validation")
    seed = bip39_to_mini_secret(normalize_mnemonic(phrase), password or "", LANGUAGE_CODE)
    return bytes(bytearray(seed))


def generate_mnemonic(words: int = 12) -> str:
    if words not in VALID_WORD_COUNTS:
        raise InvalidInputError(f"Mnemonic length must be one of {VALID_WORD_COUNTS}, got {words}")
    return bip39_generate(words, LANGUAGE_CODE)
