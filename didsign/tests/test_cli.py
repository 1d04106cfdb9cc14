"""
Tests for the didsign command-line interface.
"""

import json

from typer.testing import CliRunner

from cli.main import app

DEV_PHRASE = "bottom drive obey lake curtain smoke basket hold race lonely fit walk"
ALICE_PUBLIC_KEY = "d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
ALICE_ADDRESS = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"

runner = CliRunner()


def _invoke(*args, env=None):
    base_env = {"DIDSIGN_MNEMONIC": None, "DIDSIGN_NETWORK": None, "DIDSIGN_LOG_LEVEL": "ERROR"}
    base_env.update(env or {})
    return runner.invoke(app, list(args), env=base_env)


def test_version():
    result = _invoke("version")

    assert result.exit_code == 0
    assert "didsign" in result.stdout


def test_address_encode_and_decode():
    result = _invoke("address", "encode", "0x" + ALICE_PUBLIC_KEY, "--network", "substrate", "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["address"] == ALICE_ADDRESS

    result = _invoke("address", "decode", ALICE_ADDRESS, "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["public_key"] == ALICE_PUBLIC_KEY
    assert data["network"] == "substrate"
    assert data["prefix"] == 42


def test_address_encode_rejects_bad_key():
    result = _invoke("address", "encode", "abcd", "--json")

    assert result.exit_code == 1
    assert json.loads(result.stdout)["success"] is False


def test_address_decode_rejects_tampered():
    result = _invoke("address", "decode", ALICE_ADDRESS[:-1] + "Z", "--json")

    assert result.exit_code == 1
    assert "checksum" in json.loads(result.stdout)["error"].lower()


def test_address_validate_many():
    result = _invoke("address", "validate", ALICE_ADDRESS, "garbage", "--json")

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["valid"] is False
    assert data["results"][ALICE_ADDRESS]["is_valid"] is True
    assert data["results"]["garbage"]["is_valid_format"] is False

    assert _invoke("address", "validate", ALICE_ADDRESS).exit_code == 0


def test_address_convert():
    result = _invoke("address", "convert", ALICE_ADDRESS, "--network", "kilt", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["network"] == "kilt"
    assert data["public_key"] == ALICE_PUBLIC_KEY
    assert data["source"] == ALICE_ADDRESS


def test_address_networks():
    result = _invoke("address", "networks", "--json")

    assert result.exit_code == 0
    names = {n["name"] for n in json.loads(result.stdout)}
    assert {"polkadot", "kusama", "kilt", "substrate", "moonbeam"} <= names


def test_key_inspect_from_environment():
    result = _invoke(
        "key", "inspect", "--path", "//Alice", "--network", "substrate", "--json",
        env={"DIDSIGN_MNEMONIC": DEV_PHRASE},
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["public_key"] == ALICE_PUBLIC_KEY
    assert data["address"] == ALICE_ADDRESS


def test_key_inspect_secret_uri():
    result = _invoke("key", "inspect", "-m", DEV_PHRASE + "//Alice", "-n", "42", "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["address"] == ALICE_ADDRESS


def test_key_inspect_errors():
    assert _invoke("key", "inspect", "--json").exit_code == 1
    assert _invoke("key", "inspect", "-m", " ".join(["abandon"] * 12), "--json").exit_code == 1


def test_key_generate():
    result = _invoke("key", "generate", "--words", "24", "--json")

    assert result.exit_code == 0
    assert len(json.loads(result.stdout)["mnemonic"].split()) == 24
    assert _invoke("key", "generate", "--words", "7").exit_code == 1


def test_document_sign_verify_cycle(tmp_path):
    doc = tmp_path / "contract.pdf"
    doc.write_bytes(b"hello-doc!")
    env = {"DIDSIGN_MNEMONIC": DEV_PHRASE}

    result = _invoke("document", "status", str(doc), "--json")
    assert json.loads(result.stdout)["state"] == "unsigned"

    result = _invoke("document", "sign", str(doc), "--name", "Test", "--group", "42", "--json", env=env)
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["sidecar_path"] == str(tmp_path / "contract.didsign")
    assert data["signer_key_uri"] == "did:kilt:" + data["signer_address"]

    result = _invoke("document", "verify", str(doc), "--json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["status"] == "valid"
    assert data["signer_info"]["signer_name"] == "Test"
    assert data["signer_info"]["group_id"] == 42

    doc.write_bytes(b"hello-doc!\x00")
    result = _invoke("document", "verify", str(doc), "--json")
    assert result.exit_code == 1
    assert json.loads(result.stdout)["status"] == "invalid"

    result = _invoke("document", "status", str(doc), "--json")
    assert json.loads(result.stdout)["state"] == "signed-invalid"


def test_document_sign_errors(tmp_path):
    doc = tmp_path / "contract.pdf"
    doc.write_bytes(b"content")

    missing = _invoke("document", "sign", str(tmp_path / "nope.pdf"), "--name", "Test", "-m", DEV_PHRASE)
    assert missing.exit_code == 2

    no_seed = _invoke("document", "sign", str(doc), "--name", "Test")
    assert no_seed.exit_code == 1

    bad_seed = _invoke("document", "sign", str(doc), "--name", "Test", "-m", " ".join(["abandon"] * 12))
    assert bad_seed.exit_code == 1
    assert not (tmp_path / "contract.didsign").exists()

    notes = tmp_path / "notes.didsign"
    notes.write_bytes(b"user data")
    reserved = _invoke("document", "sign", str(notes), "--name", "Test", "-m", DEV_PHRASE)
    assert reserved.exit_code == 1
    assert notes.read_bytes() == b"user data"


def test_document_verify_without_sidecar(tmp_path):
    doc = tmp_path / "contract.pdf"
    doc.write_bytes(b"content")

    result = _invoke("document", "verify", str(doc), "--json")
    assert result.exit_code == 1
    assert json.loads(result.stdout)["status"] == "error"

    assert _invoke("document", "verify", str(tmp_path / "nope.pdf")).exit_code == 2


def test_document_list_and_cleanup(tmp_path):
    env = {"DIDSIGN_MNEMONIC": DEV_PHRASE}
    for name, group in (("a.pdf", "1"), ("b.pdf", "2")):
        (tmp_path / name).write_bytes(name.encode())
        result = _invoke("document", "sign", str(tmp_path / name), "--name", "Test", "--group", group, env=env)
        assert result.exit_code == 0, result.output

    result = _invoke("document", "list", str(tmp_path), "--group", "2", "--json")
    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert [r["document"] for r in rows] == ["b.pdf"]

    (tmp_path / "a.pdf").unlink()
    result = _invoke("document", "cleanup", str(tmp_path), "--json")
    assert result.exit_code == 0
    assert json.loads(result.stdout)["removed"] == [str(tmp_path / "a.didsign")]
    assert (tmp_path / "b.didsign").exists()

    assert _invoke("document", "list", str(tmp_path / "missing")).exit_code == 2
