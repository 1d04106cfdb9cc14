"""
Detached document signing.

Binds a document's SHA-256 to a signer identity at a point in time:

    keypair   = mnemonic //did//0 (Sr25519, hard derivation)
    address   = SS58(keypair.public_key, identity network)
    key_uri   = did:<method>:<address>
    payload   = {file name, hash, address, key_uri, name, group id, timestamp}
    signature = Sr25519(keypair, canonical_json(payload))

The record is written to <stem>.didsign beside the document. Resigning
replaces the sidecar.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..config import SignerSettings
from ..core.clock import SystemClock
from ..core.errors import (
    DidSignError,
    DocumentUnreadableError,
    InvalidInputError,
    SidecarFormatError,
    SidecarIOError,
)
from ..core.hashing import document_hash
from ..keys.junction import DID_AUTHENTICATION_PATH
from ..keys.keypair import Keypair
from ..logging_config import get_logger
from ..ss58 import IDENTITY_NETWORK, NetworkPrefix, get_network
from .model import (
    Error,
    SidecarState,
    SignaturePayload,
    SignatureRecord,
    VerificationVerdict,
)
from .store import (
    PathLike,
    find_corresponding_sidecar,
    read_record,
    sidecar_path_for,
    write_record,
)
from .verify import verify_document

DEFAULT_DID_METHOD = "kilt"
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
# Recorded file name when bytes are signed without one
UNNAMED_DOCUMENT = "document"


def derive_signing_key(seed_phrase: str, derivation_path: str = DID_AUTHENTICATION_PATH) -> Keypair:
    """
    Derive the document signing keypair from a mnemonic.

    Raises:
        InvalidSeedError: If the phrase fails BIP-39 checksum validation
        InvalidInputError: If the derivation path is malformed
    """
    return Keypair.from_mnemonic(seed_phrase, derivation_path)


def _read_document(path: Path) -> bytes:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as ex:
        raise DocumentUnreadableError(f"Cannot read document {path}: {ex}") from ex
    if not data:
        raise DocumentUnreadableError(f"Document is empty: {path}")
    return data


def _check_sidecar_owner(sidecar: Path, document: Path) -> None:
    """
    Refuse to replace a sidecar that still belongs to another existing
    document with the same stem (report.pdf vs report.txt).

    Unreadable sidecars are treated as replaceable.
    """
    if not sidecar.is_file():
        return
    try:
        owner = read_record(sidecar).payload.document_file_name
    except (SidecarIOError, SidecarFormatError):
        return
    if owner != document.name and (document.parent / owner).is_file():
        raise InvalidInputError(
            f"{sidecar.name} holds the signature of {owner}; signing {document.name} would replace it"
        )


@dataclass(frozen=True)
class SignResult:
    record: SignatureRecord
    sidecar_path: Path


@dataclass(frozen=True)
class SignOutcome:
    """Per-document result of a batch signing run."""
    document_path: Path
    group_id: int
    result: Optional[SignResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class DocumentSigner:
    """
    Sign documents and verify them against their sidecars.

    Stateless apart from configuration; safe to share across threads.
    Concurrent operations on the same document path race on its sidecar and
    must be serialized by the caller.
    """

    def __init__(
        self,
        network: Union[str, int, NetworkPrefix] = IDENTITY_NETWORK,
        did_method: str = DEFAULT_DID_METHOD,
        derivation_path: str = DID_AUTHENTICATION_PATH,
        clock=None,
    ):
        self.network = get_network(network)
        self.did_method = did_method
        self.derivation_path = derivation_path
        self.clock = clock or SystemClock()

    @classmethod
    def from_settings(cls, settings: SignerSettings, clock=None) -> "DocumentSigner":
        return cls(
            network=settings.network_prefix,
            did_method=settings.did_method,
            derivation_path=settings.derivation_path,
            clock=clock,
        )

    def signer_key_uri(self, address: str) -> str:
        return f"did:{self.did_method}:{address}"

    def derive_signing_key(self, seed_phrase: str) -> Keypair:
        return derive_signing_key(seed_phrase, self.derivation_path)

    def sign(
        self,
        document: bytes,
        seed_phrase: str,
        signer_name: str,
        group_id: int,
        document_name: Optional[str] = None,
    ) -> SignatureRecord:
        """
        Build a signed record for document bytes (no file is written).

        Args:
            document: Exact document bytes
            seed_phrase: BIP-39 mnemonic of the signer
            signer_name: Display name (pass-through)
            group_id: Caller-defined int64 group id (pass-through)
            document_name: Base name recorded in the payload (default "document")

        Raises:
            DocumentUnreadableError: Empty document
            InvalidInputError: Bad group id, name or document name
            InvalidSeedError: Invalid mnemonic
        """
        if not document:
            raise DocumentUnreadableError("Document is empty")
        if isinstance(group_id, bool) or not isinstance(group_id, int) or not INT64_MIN <= group_id <= INT64_MAX:
            raise InvalidInputError(f"group_id must be a 64-bit integer, got {group_id!r}")
        if document_name is None:
            document_name = UNNAMED_DOCUMENT
        if not isinstance(signer_name, str):
            raise InvalidInputError("signer_name must be a string")
        if not document_name or Path(document_name).name != document_name:
            raise InvalidInputError(f"document_name must be a bare file name, got {document_name!r}")

        log = get_logger(__name__, trace_id=document_name)

        digest = document_hash(document)
        keypair = self.derive_signing_key(seed_phrase)
        address = keypair.ss58_address(self.network).text

        payload = SignaturePayload(
            document_file_name=document_name,
            document_hash=digest,
            signer_address=address,
            signer_key_uri=self.signer_key_uri(address),
            signer_name=signer_name,
            group_id=group_id,
            timestamp_millis=self.clock.now_millis(),
        )
        signature = keypair.sign(payload.signing_bytes())

        log.info("Signed document hash %s as %s", digest.hex(), address)
        return SignatureRecord(payload=payload, signature=signature, public_key=keypair.public_key)

    def sign_file(
        self,
        document_path: PathLike,
        seed_phrase: str,
        signer_name: str,
        group_id: int,
    ) -> SignResult:
        """
        Sign a document on disk and write its sidecar.

        Raises:
            DocumentUnreadableError: Missing, unreadable or empty document
            InvalidInputError: Document has the sidecar extension, or its
                sidecar belongs to another existing document
            SidecarIOError: Sidecar cannot be written
            InvalidSeedError: Invalid mnemonic
        """
        path = Path(document_path)
        sidecar_path = sidecar_path_for(path)
        _check_sidecar_owner(sidecar_path, path)
        data = _read_document(path)
        record = self.sign(data, seed_phrase, signer_name, group_id, document_name=path.name)
        sidecar = write_record(record, sidecar_path)
        get_logger(__name__, trace_id=path.name).info("Wrote signature file %s", sidecar)
        return SignResult(record=record, sidecar_path=sidecar)

    def sign_many(
        self,
        items: Iterable[Tuple[PathLike, int]],
        seed_phrase: str,
        signer_name: str,
    ) -> List[SignOutcome]:
        """
        Sign several (document_path, group_id) pairs.

        A failing document does not stop the batch; its error is recorded in
        its outcome.
        """
        outcomes = []
        for document_path, group_id in items:
            path = Path(document_path)
            try:
                result = self.sign_file(path, seed_phrase, signer_name, group_id)
                outcomes.append(SignOutcome(document_path=path, group_id=group_id, result=result))
            except DidSignError as ex:
                get_logger(__name__, trace_id=path.name).error("Signing failed: %s", ex)
                outcomes.append(SignOutcome(document_path=path, group_id=group_id, error=str(ex)))
        return outcomes

    def verify(
        self,
        document: bytes,
        sidecar_path: PathLike,
        document_name: Optional[str] = None,
    ) -> VerificationVerdict:
        return verify_document(document, sidecar_path, document_name)

    def verify_file(
        self,
        document_path: PathLike,
        sidecar_path: Optional[PathLike] = None,
    ) -> VerificationVerdict:
        """
        Verify a document on disk.

        Uses the corresponding sidecar when sidecar_path is not given.
        """
        path = Path(document_path)
        if sidecar_path is None:
            sidecar_path = find_corresponding_sidecar(path)
            if sidecar_path is None:
                return Error(f"no signature file found for {path.name}")

        try:
            data = _read_document(path)
        except DocumentUnreadableError as ex:
            return Error(str(ex))

        return self.verify(data, sidecar_path, document_name=path.name)

    def state_of(self, document_path: PathLike) -> SidecarState:
        """
        Classify a document as unsigned, signed-valid or signed-invalid.

        A missing or unreadable document with a sidecar counts as
        signed-invalid.
        """
        if find_corresponding_sidecar(document_path) is None:
            return SidecarState.UNSIGNED
        verdict = self.verify_file(document_path)
        return SidecarState.SIGNED_VALID if verdict.is_valid else SidecarState.SIGNED_INVALID


def sign_document(
    document_path: PathLike,
    seed_phrase: str,
    signer_name: str,
    group_id: int,
) -> SignResult:
    """Sign with default settings (KILT network, //did//0)."""
    return DocumentSigner().sign_file(document_path, seed_phrase, signer_name, group_id)


def verify_file(document_path: PathLike, sidecar_path: Optional[PathLike] = None) -> VerificationVerdict:
    return DocumentSigner().verify_file(document_path, sidecar_path)
