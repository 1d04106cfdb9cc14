"""
Detached document signatures.

Provides:
- SignaturePayload / SignatureRecord model with canonical serialization
- Sr25519 signing with a //did//0 derived key
- Sidecar (.didsign) storage, lookup and orphan cleanup
- Verification verdicts (Valid / Invalid / Error)
"""

from .model import (
    SignaturePayload,
    SignatureRecord,
    SignerInfo,
    Valid,
    Invalid,
    Error,
    VerificationVerdict,
    SidecarState,
    REASON_DOCUMENT_MODIFIED,
    REASON_BAD_SIGNATURE,
    REASON_ADDRESS_MISMATCH,
    REASON_OTHER_DOCUMENT,
    MESSAGE_CORRUPT_SIDECAR,
)
from .store import (
    SIDECAR_EXTENSION,
    SidecarStore,
    sidecar_path_for,
    is_sidecar_path,
    find_corresponding_sidecar,
    read_record,
    write_record,
)
from .verify import verify_document, verify_record
from .signer import (
    DocumentSigner,
    SignResult,
    SignOutcome,
    derive_signing_key,
    sign_document,
    verify_file,
)

__all__ = [
    "SignaturePayload",
    "SignatureRecord",
    "SignerInfo",
    "Valid",
    "Invalid",
    "Error",
    "VerificationVerdict",
    "SidecarState",
    "REASON_DOCUMENT_MODIFIED",
    "REASON_BAD_SIGNATURE",
    "REASON_ADDRESS_MISMATCH",
    "REASON_OTHER_DOCUMENT",
    "MESSAGE_CORRUPT_SIDECAR",
    "SIDECAR_EXTENSION",
    "SidecarStore",
    "sidecar_path_for",
    "is_sidecar_path",
    "find_corresponding_sidecar",
    "read_record",
    "write_record",
    "verify_document",
    "verify_record",
    "DocumentSigner",
    "SignResult",
    "SignOutcome",
    "derive_signing_key",
    "sign_document",
    "verify_file",
]
