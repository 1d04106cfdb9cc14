"""
Key derivation from BIP-39 mnemonics.

Provides:
- Mnemonic validation, generation and mini-secret expansion
- Substrate derivation paths (//hard, /soft, ///password)
- Sr25519 keypairs (signing) and Ed25519 keypairs (inspection)
"""

from .mnemonic import (
    validate_mnemonic,
    mnemonic_to_mini_secret,
    generate_mnemonic,
    mnemonic_word_count,
    normalize_mnemonic,
)
from .junction import (
    DeriveJunction,
    parse_derivation_path,
    is_valid_path,
    split_secret_uri,
    DID_AUTHENTICATION_PATH,
    DID_ASSERTION_PATH,
    DID_DELEGATION_PATH,
)
from .keypair import (
    Keypair,
    Ed25519Keypair,
    derive_keypair,
    verify_signature,
    SR25519,
    ED25519,
    SCHEMES,
)

__all__ = [
    "validate_mnemonic",
    "mnemonic_to_mini_secret",
    "generate_mnemonic",
    "mnemonic_word_count",
    "normalize_mnemonic",
    "DeriveJunction",
    "parse_derivation_path",
    "is_valid_path",
    "split_secret_uri",
    "DID_AUTHENTICATION_PATH",
    "DID_ASSERTION_PATH",
    "DID_DELEGATION_PATH",
    "Keypair",
    "Ed25519Keypair",
    "derive_keypair",
    "verify_signature",
    "SR25519",
    "ED25519",
    "SCHEMES",
]
