"""
Sr25519 and Ed25519 keypairs derived from mnemonics.

Sr25519 (Schnorrkel over Ristretto25519) is the document signing scheme.
Ed25519 is available for key inspection and follows the Substrate
hard-derivation rule; it has no soft derivation.
"""

from typing import List, Optional, Union

import sr25519
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..core.errors import InvalidInputError
from ..core.hashing import blake2b_256
from ..ss58 import Address, NetworkPrefix, encode
from .junction import DeriveJunction, parse_derivation_path, scale_encode_str
from .mnemonic import mnemonic_to_mini_secret

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64
MINI_SECRET_LENGTH = 32

SR25519 = "sr25519"
ED25519 = "ed25519"
SCHEMES = (SR25519, ED25519)


class Keypair:
    """
    Sr25519 keypair.

    Provides:
    - Construction from a mini secret or a mnemonic + derivation path
    - Hard and soft derivation
    - Signing and verification
    - SS58 address rendering
    """

    scheme = SR25519
    algorithm = "Sr25519"

    def __init__(self, public_key: bytes, secret_key: bytes):
        self.public_key = bytes(public_key)
        self._secret_key = bytes(secret_key)

    @classmethod
    def from_mini_secret(cls, seed: bytes) -> "Keypair":
        """Expand a 32-byte mini secret into a keypair."""
        if len(seed) != MINI_SECRET_LENGTH:
            raise InvalidInputError(f"Mini secret must be {MINI_SECRET_LENGTH} bytes, got {len(seed)}")
        public_key, secret_key = sr25519.pair_from_seed(bytes(seed))
        return cls(public_key, secret_key)

    @classmethod
    def from_mnemonic(cls, phrase: str, path: str = "", password: str = "") -> "Keypair":
        """
        Derive a keypair from a BIP-39 mnemonic and a derivation path.

        Raises:
            InvalidSeedError: If the mnemonic fails validation
            InvalidInputError: If the path is malformed
        """
        junctions = parse_derivation_path(path)
        root = cls.from_mini_secret(mnemonic_to_mini_secret(phrase, password))
        return root.derive(junctions)

    def derive(self, junctions: List[DeriveJunction]) -> "Keypair":
        public_key, secret_key = self.public_key, self._secret_key
        for junction in junctions:
            if junction.is_hard:
                _, public_key, secret_key = sr25519.hard_derive_keypair(
                    (junction.chain_code, public_key, secret_key), b""
                )
            else:
                _, public_key, secret_key = sr25519.derive_keypair(
                    (junction.chain_code, public_key, secret_key), b""
                )
        return Keypair(public_key, secret_key)

    def sign(self, message: bytes) -> bytes:
        """
        Sign message bytes.

        Sr25519 signatures are randomized: two signatures over the same
        message differ but both verify.

        Returns:
            64-byte signature
        """
        return bytes(sr25519.sign((self.public_key, self._secret_key), message))

    def verify(self, message: bytes, signature: bytes) -> bool:
        return verify_signature(self.public_key, message, signature)

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    def ss58_address(self, network: Union[str, int, NetworkPrefix]) -> Address:
        return encode(self.public_key, network)

    def __repr__(self) -> str:
        return f"Keypair(sr25519, public_key={self.public_key_hex})"


def verify_signature(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an Sr25519 signature.

    Returns:
        True if signature is valid, False otherwise (including malformed sizes)
    """
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False
    try:
        return bool(sr25519.verify(bytes(signature), bytes(message), bytes(public_key)))
    except (ValueError, TypeError):
        return False


class Ed25519Keypair:
    """
    Ed25519 keypair using Substrate seed semantics.

    The mini secret is the Ed25519 private seed; a hard junction replaces it
    with blake2b-256(SCALE("Ed25519HDKD") || seed || chain_code).
    """

    scheme = ED25519
    algorithm = "Ed25519"

    def __init__(self, seed: bytes):
        if len(seed) != MINI_SECRET_LENGTH:
            raise InvalidInputError(f"Ed25519 seed must be {MINI_SECRET_LENGTH} bytes, got {len(seed)}")
        self._seed = bytes(seed)
        self.private_key = Ed25519PrivateKey.from_private_bytes(self._seed)
        self.public_key = self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    @classmethod
    def from_mnemonic(cls, phrase: str, path: str = "", password: str = "") -> "Ed25519Keypair":
        junctions = parse_derivation_path(path)
        return cls(mnemonic_to_mini_secret(phrase, password)).derive(junctions)

    def derive(self, junctions: List[DeriveJunction]) -> "Ed25519Keypair":
        seed = self._seed
        for junction in junctions:
            if not junction.is_hard:
                raise InvalidInputError("Ed25519 supports hard derivation only")
            seed = blake2b_256(scale_encode_str("Ed25519HDKD") + seed + junction.chain_code)
        return Ed25519Keypair(seed)

    def sign(self, message: bytes) -> bytes:
        return self.private_key.sign(message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        public_key = Ed25519PublicKey.from_public_bytes(self.public_key)
        try:
            public_key.verify(signature, message)
            return True
        except InvalidSignature:
            return False

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    def ss58_address(self, network: Union[str, int, NetworkPrefix]) -> Address:
        return encode(self.public_key, network)

    def __repr__(self) -> str:
        return f"Ed25519Keypair(public_key={self.public_key_hex})"


def derive_keypair(
    phrase: str,
    path: str = "",
    scheme: str = SR25519,
    password: Optional[str] = None,
) -> Union[Keypair, Ed25519Keypair]:
    """
    Derive a keypair for the requested scheme.

    Raises:
        InvalidInputError: Unknown scheme or malformed path
        InvalidSeedError: Invalid mnemonic
    """
    scheme = scheme.lower()
    if scheme == SR25519:
        return Keypair.from_mnemonic(phrase, path, password or "")
    if scheme == ED25519:
        return Ed25519Keypair.from_mnemonic(phrase, path, password or "")
    raise InvalidInputError(f"Unknown signature scheme: {scheme} (expected one of {SCHEMES})")
