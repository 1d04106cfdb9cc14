"""
Document verification against a sidecar signature record.

Checks, in order:
1. Sidecar parses into a SignatureRecord       -> Error otherwise
2. Document hash matches the signed hash       -> Invalid("document modified after signing")
3. Sr25519 signature verifies under public_key -> Invalid("signature does not match signer key")
4. Signer address encodes the embedded key     -> Invalid("signer address inconsistent with embedded key")

Mismatches are verdicts, not exceptions.
"""

import hmac
import logging
from typing import Optional

from ..core.errors import AddressError, SidecarFormatError, SidecarIOError
from ..core.hashing import document_hash
from ..keys.keypair import verify_signature
from ..ss58 import decode, encode
from .model import (
    Error,
    Invalid,
    MESSAGE_CORRUPT_SIDECAR,
    REASON_ADDRESS_MISMATCH,
    REASON_BAD_SIGNATURE,
    REASON_DOCUMENT_MODIFIED,
    REASON_OTHER_DOCUMENT,
    SignatureRecord,
    SignerInfo,
    Valid,
    VerificationVerdict,
)
from .store import PathLike, read_record

logger = logging.getLogger(__name__)


def verify_hash(document: bytes, record: SignatureRecord) -> bool:
    return hmac.compare_digest(document_hash(document), record.payload.document_hash)


def verify_record_signature(record: SignatureRecord) -> bool:
    return verify_signature(record.public_key, record.payload.signing_bytes(), record.signature)


def verify_signer_address(record: SignatureRecord) -> bool:
    """
    Re-encode the embedded public key under the address's own network and
    compare with the recorded signer address.
    """
    try:
        address = decode(record.payload.signer_address)
    except AddressError:
        return False
    return encode(record.public_key, address.network).text == record.payload.signer_address


def verify_record(
    document: bytes,
    record: SignatureRecord,
    document_name: Optional[str] = None,
) -> VerificationVerdict:
    """
    Verify document bytes against an already-loaded record.

    When document_name is given and the hash differs, a record naming a
    different file is reported as belonging to another document.

    Returns:
        Valid, or Invalid with the first failing check
    """
    if not verify_hash(document, record):
        if document_name is not None and document_name != record.payload.document_file_name:
            return Invalid(REASON_OTHER_DOCUMENT)
        return Invalid(REASON_DOCUMENT_MODIFIED)

    if not verify_record_signature(record):
        return Invalid(REASON_BAD_SIGNATURE)

    if not verify_signer_address(record):
        return Invalid(REASON_ADDRESS_MISMATCH)

    return Valid(signer_info=SignerInfo.from_record(record), record=record)


def verify_document(
    document: bytes,
    sidecar_path: PathLike,
    document_name: Optional[str] = None,
) -> VerificationVerdict:
    """
    Verify document bytes against the sidecar at sidecar_path.

    Args:
        document: Document bytes as they exist now
        sidecar_path: Path to the .didsign file
        document_name: File name of the document being verified, if known

    Returns:
        VerificationVerdict (Valid, Invalid or Error)
    """
    try:
        record = read_record(sidecar_path)
    except (SidecarIOError, SidecarFormatError) as ex:
        logger.warning("Cannot load signature file %s: %s", sidecar_path, ex)
        return Error(MESSAGE_CORRUPT_SIDECAR)

    verdict = verify_record(document, record, document_name)
    if isinstance(verdict, Invalid):
        logger.info("Verification failed for %s: %s", sidecar_path, verdict.reason)
    return verdict
