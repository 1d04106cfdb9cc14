"""
Tests for mnemonic handling and key derivation.

Vectors are the Substrate development accounts derived from the
well-known dev phrase.
"""

import pytest

from didsign.core.errors import InvalidInputError, InvalidSeedError
from didsign.keys import (
    DID_AUTHENTICATION_PATH,
    ED25519,
    SR25519,
    DeriveJunction,
    Ed25519Keypair,
    Keypair,
    derive_keypair,
    generate_mnemonic,
    is_valid_path,
    mnemonic_to_mini_secret,
    mnemonic_word_count,
    parse_derivation_path,
    split_secret_uri,
    validate_mnemonic,
    verify_signature,
)
from didsign.ss58 import KILT, SUBSTRATE

DEV_PHRASE = "bottom drive obey lake curtain smoke basket hold race lonely fit walk"
INVALID_PHRASE = " ".join(["abandon"] * 12)

ROOT_PUBLIC_KEY = "46ebddef8cd9bb167dc30878d7113b7e168e6f0646beffd77d69d39bad76b47a"
ROOT_ADDRESS = "5DfhGyQdFobKM8NsWvEeAKk5EQQgYe9AydgJ7rMB6E1EqRzV"
ALICE_PUBLIC_KEY = "d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
ALICE_ADDRESS = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
ALICE_ED25519_PUBLIC_KEY = "88dc3417d5058ec4b4503e0c12ea1a0a89be200fe98922423d4334014fa6b0ee"
ALICE_ED25519_ADDRESS = "5FA9nQDVg267DEd8m1ZypXLBnvN7SFxYwV7ndqSYGiN9TTpu"


def test_validate_mnemonic():
    assert validate_mnemonic(DEV_PHRASE)
    assert validate_mnemonic("  " + DEV_PHRASE.upper() + "  ")
    assert not validate_mnemonic(INVALID_PHRASE), "Bad checksum must be rejected"
    assert not validate_mnemonic("bottom drive obey")
    assert not validate_mnemonic("")
    assert not validate_mnemonic(None)


def test_mnemonic_to_mini_secret():
    seed = mnemonic_to_mini_secret(DEV_PHRASE)

    assert isinstance(seed, bytes)
    assert len(seed) == 32
    assert seed == mnemonic_to_mini_secret(DEV_PHRASE)
    assert seed != mnemonic_to_mini_secret(DEV_PHRASE, "password")


def test_mini_secret_rejects_invalid_phrase():
    with pytest.raises(InvalidSeedError):
        mnemonic_to_mini_secret(INVALID_PHRASE)


@pytest.mark.parametrize("words", [12, 24])
def test_generate_mnemonic(words):
    phrase = generate_mnemonic(words)

    assert mnemonic_word_count(phrase) == words
    assert validate_mnemonic(phrase)


def test_generate_mnemonic_rejects_word_count():
    with pytest.raises(InvalidInputError):
        generate_mnemonic(13)


def test_parse_derivation_path():
    junctions = parse_derivation_path("//did//0")

    assert len(junctions) == 2
    assert all(j.is_hard for j in junctions)
    # "did" as a SCALE string: compact length 3 then the bytes
    assert junctions[0].chain_code == b"\x0cdid" + bytes(28)
    # 0 as u64 little-endian
    assert junctions[1].chain_code == bytes(32)

    soft = parse_derivation_path("/soft")
    assert len(soft) == 1
    assert not soft[0].is_hard

    assert parse_derivation_path("") == []


def test_long_junction_is_hashed():
    junction = DeriveJunction.from_segment("x" * 40, is_hard=True)

    assert len(junction.chain_code) == 32
    assert junction.chain_code != DeriveJunction.from_segment("x" * 41, is_hard=True).chain_code


@pytest.mark.parametrize("path", ["did", "//", "//did/", "///", "did//0"])
def test_invalid_paths(path):
    assert not is_valid_path(path)
    with pytest.raises(InvalidInputError):
        parse_derivation_path(path)


def test_split_secret_uri():
    phrase, path, password = split_secret_uri(DEV_PHRASE + "//did//0///secret")

    assert phrase == DEV_PHRASE
    assert path == "//did//0"
    assert password == "secret"

    assert split_secret_uri(DEV_PHRASE) == (DEV_PHRASE, "", None)


def test_root_keypair_vector():
    keypair = Keypair.from_mnemonic(DEV_PHRASE)

    assert keypair.public_key_hex == ROOT_PUBLIC_KEY
    assert keypair.ss58_address(SUBSTRATE).text == ROOT_ADDRESS


def test_alice_sr25519_vector():
    """//Alice is the standard development account."""
    keypair = derive_keypair(DEV_PHRASE, "//Alice")

    assert keypair.algorithm == "Sr25519"
    assert keypair.public_key_hex == ALICE_PUBLIC_KEY
    assert keypair.ss58_address(SUBSTRATE).text == ALICE_ADDRESS


def test_alice_ed25519_vector():
    keypair = derive_keypair(DEV_PHRASE, "//Alice", scheme=ED25519)

    assert isinstance(keypair, Ed25519Keypair)
    assert keypair.public_key_hex == ALICE_ED25519_PUBLIC_KEY
    assert keypair.ss58_address(42).text == ALICE_ED25519_ADDRESS


def test_derivation_is_deterministic_and_path_sensitive():
    a = derive_keypair(DEV_PHRASE, DID_AUTHENTICATION_PATH)
    b = derive_keypair(DEV_PHRASE, DID_AUTHENTICATION_PATH)
    c = derive_keypair(DEV_PHRASE, "//did//1")
    soft = derive_keypair(DEV_PHRASE, "/did/0")

    assert a.public_key == b.public_key
    assert a.public_key != c.public_key
    assert a.public_key != soft.public_key
    assert a.ss58_address(KILT).text.startswith("4")


def test_password_changes_key():
    plain = derive_keypair(DEV_PHRASE, DID_AUTHENTICATION_PATH)
    protected = derive_keypair(DEV_PHRASE, DID_AUTHENTICATION_PATH, password="pw")

    assert plain.public_key != protected.public_key


def test_sr25519_sign_and_verify():
    keypair = derive_keypair(DEV_PHRASE, DID_AUTHENTICATION_PATH)
    message = b"hello-doc!"

    sig1 = keypair.sign(message)
    sig2 = keypair.sign(message)

    assert len(sig1) == 64
    assert keypair.verify(message, sig1)
    assert keypair.verify(message, sig2), "Randomized signatures must both verify"
    assert not keypair.verify(message + b"x", sig1)

    other = derive_keypair(DEV_PHRASE, "//Alice")
    assert not verify_signature(other.public_key, message, sig1)


def test_verify_signature_rejects_bad_sizes():
    keypair = derive_keypair(DEV_PHRASE, "//Alice")
    sig = keypair.sign(b"m")

    assert not verify_signature(keypair.public_key[:31], b"m", sig)
    assert not verify_signature(keypair.public_key, b"m", sig[:63])
    assert not verify_signature(keypair.public_key, b"m", bytes(64))


def test_ed25519_sign_and_verify():
    keypair = derive_keypair(DEV_PHRASE, "//Alice", scheme=ED25519)
    sig = keypair.sign(b"m")

    assert keypair.verify(b"m", sig)
    assert not keypair.verify(b"n", sig)


def test_ed25519_rejects_soft_derivation():
    with pytest.raises(InvalidInputError):
        derive_keypair(DEV_PHRASE, "/soft", scheme=ED25519)


def test_derive_keypair_rejects_unknown_scheme():
    with pytest.raises(InvalidInputError):
        derive_keypair(DEV_PHRASE, "", scheme="ecdsa")


def test_derive_keypair_invalid_seed():
    with pytest.raises(InvalidSeedError):
        derive_keypair(INVALID_PHRASE, DID_AUTHENTICATION_PATH, scheme=SR25519)


def test_mini_secret_length_checked():
    with pytest.raises(InvalidInputError):
        Keypair.from_mini_secret(bytes(16))
