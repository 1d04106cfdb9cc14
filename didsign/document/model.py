"""
Signature record model for detached document signatures.

A signature record captures:
- Document identity (file name + SHA-256 of its bytes)
- Signer identity (SS58 address, DID key URI, display name)
- Caller metadata (group id) and signing time
- Sr25519 signature over the canonical payload bytes
- Signer public key
"""

import enum
import json
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Dict, Optional, Union

from ..core.canonical import canonical_json_bytes
from ..core.errors import SidecarFormatError

RECORD_VERSION = 1
DOCUMENT_HASH_LENGTH = 32
SIGNATURE_LENGTH = 64
PUBLIC_KEY_LENGTH = 32
ALGORITHM = "Sr25519"

REASON_DOCUMENT_MODIFIED = "document modified after signing"
REASON_BAD_SIGNATURE = "signature does not match signer key"
REASON_ADDRESS_MISMATCH = "signer address inconsistent with embedded key"
REASON_OTHER_DOCUMENT = "signature file belongs to another document"
MESSAGE_CORRUPT_SIDECAR = "corrupt or unreadable signature file"


def _hex_field(data: Dict[str, Any], key: str, length: int) -> bytes:
    value = data[key]
    if not isinstance(value, str):
        raise SidecarFormatError(f"Field {key} must be a hex string")
    try:
        raw = bytes.fromhex(value)
    except ValueError as ex:
        raise SidecarFormatError(f"Field {key} is not valid hex") from ex
    if len(raw) != length:
        raise SidecarFormatError(f"Field {key} must be {length} bytes, got {len(raw)}")
    return raw


def _typed_field(data: Dict[str, Any], key: str, kind: type) -> Any:
    value = data[key]
    # bool is an int subclass; reject it for integer fields
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SidecarFormatError(f"Field {key} must be {kind.__name__}")
    return value


def _file_name_field(data: Dict[str, Any], key: str) -> str:
    value = _typed_field(data, key, str)
    # Used in path joins by the store; must not escape the document directory
    if not value or value in (".", "..") or PurePath(value).name != value:
        raise SidecarFormatError(f"Field {key} must be a bare file name, got {value!r}")
    return value


@dataclass(frozen=True)
class SignaturePayload:
    """
    The data that gets signed.

    Fields:
        document_file_name: Base name of the signed document
        document_hash: SHA-256 of the document bytes (32 bytes)
        signer_address: SS58 address of the signer key
        signer_key_uri: DID key identifier ("did:<method>:<address>")
        signer_name: Display name (pass-through metadata)
        group_id: Caller-defined group id (pass-through metadata)
        timestamp_millis: Signing time, milliseconds since the epoch
    """
    document_file_name: str
    document_hash: bytes
    signer_address: str
    signer_key_uri: str
    signer_name: str
    group_id: int
    timestamp_millis: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_file_name": self.document_file_name,
            "document_hash": self.document_hash.hex(),
            "signer_address": self.signer_address,
            "signer_key_uri": self.signer_key_uri,
            "signer_name": self.signer_name,
            "group_id": self.group_id,
            "timestamp_millis": self.timestamp_millis,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignaturePayload":
        try:
            return cls(
                document_file_name=_file_name_field(data, "document_file_name"),
                document_hash=_hex_field(data, "document_hash", DOCUMENT_HASH_LENGTH),
                signer_address=_typed_field(data, "signer_address", str),
                signer_key_uri=_typed_field(data, "signer_key_uri", str),
                signer_name=_typed_field(data, "signer_name", str),
                group_id=_typed_field(data, "group_id", int),
                timestamp_millis=_typed_field(data, "timestamp_millis", int),
            )
        except KeyError as ex:
            raise SidecarFormatError(f"Missing payload field: {ex.args[0]}") from ex
        except TypeError as ex:
            raise SidecarFormatError("Payload must be an object") from ex

    def signing_bytes(self) -> bytes:
        """
        Canonical bytes that the signature covers.

        Sorted keys, no whitespace, UTF-8; byte fields as lower-case hex.
        """
        return canonical_json_bytes(self.to_dict())


@dataclass(frozen=True)
class SignatureRecord:
    """
    Persisted sidecar contents.

    Fields:
        payload: Signed payload
        signature: Sr25519 signature over payload.signing_bytes() (64 bytes)
        public_key: Signer public key (32 bytes)
    """
    payload: SignaturePayload
    signature: bytes
    public_key: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": RECORD_VERSION,
            "payload": self.payload.to_dict(),
            "signature": self.signature.hex(),
            "public_key": self.public_key.hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignatureRecord":
        """
        Deserialize a record.

        Raises:
            SidecarFormatError: Missing fields, wrong types, wrong byte lengths
                or an unsupported version
        """
        if not isinstance(data, dict):
            raise SidecarFormatError("Signature record must be an object")

        version = data.get("version", RECORD_VERSION)
        if version != RECORD_VERSION:
            raise SidecarFormatError(f"Unsupported signature record version: {version}")

        try:
            return cls(
                payload=SignaturePayload.from_dict(data["payload"]),
                signature=_hex_field(data, "signature", SIGNATURE_LENGTH),
                public_key=_hex_field(data, "public_key", PUBLIC_KEY_LENGTH),
            )
        except KeyError as ex:
            raise SidecarFormatError(f"Missing record field: {ex.args[0]}") from ex

    def to_json(self) -> str:
        """Serialize to JSON string (for file storage)."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: Union[str, bytes]) -> "SignatureRecord":
        try:
            data = json.loads(json_str)
        except (ValueError, UnicodeDecodeError, RecursionError) as ex:
            raise SidecarFormatError(f"Signature file is not valid JSON: {ex}") from ex
        return cls.from_dict(data)


@dataclass(frozen=True)
class SignerInfo:
    """Signer details reported by a successful verification."""
    address: str
    key_uri: str
    public_key_hex: str
    signer_name: str
    group_id: int
    timestamp_millis: int
    algorithm: str = ALGORITHM

    @classmethod
    def from_record(cls, record: SignatureRecord) -> "SignerInfo":
        return cls(
            address=record.payload.signer_address,
            key_uri=record.payload.signer_key_uri,
            public_key_hex=record.public_key.hex(),
            signer_name=record.payload.signer_name,
            group_id=record.payload.group_id,
            timestamp_millis=record.payload.timestamp_millis,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "key_uri": self.key_uri,
            "public_key": self.public_key_hex,
            "signer_name": self.signer_name,
            "group_id": self.group_id,
            "timestamp_millis": self.timestamp_millis,
            "algorithm": self.algorithm,
        }


@dataclass(frozen=True)
class Valid:
    signer_info: SignerInfo
    record: Optional[SignatureRecord] = None
    status = "valid"

    @property
    def is_valid(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "signer_info": self.signer_info.to_dict()}


@dataclass(frozen=True)
class Invalid:
    reason: str
    status = "invalid"

    @property
    def is_valid(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "reason": self.reason}


@dataclass(frozen=True)
class Error:
    message: str
    status = "error"

    @property
    def is_valid(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "message": self.message}


VerificationVerdict = Union[Valid, Invalid, Error]


class SidecarState(str, enum.Enum):
    """Reachable states of a (document, sidecar) pair."""
    UNSIGNED = "unsigned"
    SIGNED_VALID = "signed-valid"
    SIGNED_INVALID = "signed-invalid"
