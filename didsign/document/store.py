"""
Sidecar storage.

A document's signature lives next to it:
    <dir>/<stem>.pdf  ->  <dir>/<stem>.didsign

Lookup is a pure path operation; no content scan is needed to find the
sidecar of a given document.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from ..core.errors import InvalidInputError, SidecarFormatError, SidecarIOError
from .model import SignatureRecord

logger = logging.getLogger(__name__)

SIDECAR_EXTENSION = ".didsign"

PathLike = Union[str, "os.PathLike[str]"]


def is_sidecar_path(path: PathLike) -> bool:
    return Path(path).suffix == SIDECAR_EXTENSION


def sidecar_path_for(document_path: PathLike) -> Path:
    """
    Same directory, same base name, extension replaced.

    Raises:
        InvalidInputError: If the document itself has the sidecar extension
    """
    if is_sidecar_path(document_path):
        raise InvalidInputError(
            f"{Path(document_path).name}: the {SIDECAR_EXTENSION} extension is reserved for signature files"
        )
    return Path(document_path).with_suffix(SIDECAR_EXTENSION)


def find_corresponding_sidecar(document_path: PathLike) -> Optional[Path]:
    """
    Locate the sidecar for a document.

    Returns:
        Sidecar path, or None if the document was never signed
    """
    if is_sidecar_path(document_path):
        return None
    path = sidecar_path_for(document_path)
    return path if path.is_file() else None


def write_record(record: SignatureRecord, path: PathLike) -> Path:
    """
    Write a record atomically, replacing any existing sidecar.

    Raises:
        SidecarIOError: If the file cannot be written
    """
    path = Path(path)
    directory = path.parent if str(path.parent) else Path(".")
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(record.to_json())
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as ex:
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise SidecarIOError(f"Cannot write signature file {path}: {ex}") from ex
    return path


def read_record(path: PathLike) -> SignatureRecord:
    """
    Load a record from a sidecar file.

    Raises:
        SidecarIOError: If the file cannot be read
        SidecarFormatError: If the contents do not parse
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as ex:
        raise SidecarIOError(f"Cannot read signature file {path}: {ex}") from ex
    return SignatureRecord.from_json(raw)


class SidecarStore:
    """
    Manage the sidecar files of one document directory.

    Storage format:
    - One JSON file per signed document: {stem}.didsign
    - Contents: SignatureRecord JSON
    """

    def __init__(self, directory: PathLike):
        self.directory = Path(directory)

    def path_for(self, document_name: str) -> Path:
        return sidecar_path_for(self.directory / document_name)

    def save(self, record: SignatureRecord, document_name: Optional[str] = None) -> Path:
        """
        Save the sidecar for a document (defaults to the name in the payload).

        Returns:
            Path to the written sidecar
        """
        name = document_name or record.payload.document_file_name
        path = write_record(record, self.path_for(name))
        logger.debug("Saved signature file %s", path)
        return path

    def load(self, path: PathLike) -> SignatureRecord:
        return read_record(path)

    def find_corresponding(self, document_name: str) -> Optional[Path]:
        return find_corresponding_sidecar(self.directory / document_name)

    def list_sidecars(self) -> List[Path]:
        """All sidecar files in the directory, sorted by name."""
        if not self.directory.is_dir():
            return []
        return sorted(
            p for p in self.directory.iterdir() if p.is_file() and p.suffix == SIDECAR_EXTENSION
        )

    def find_by_group(self, group_id: int) -> List[Path]:
        """
        Sidecars whose payload carries the given group id.

        Unreadable sidecars are skipped.
        """
        matches = []
        for path in self.list_sidecars():
            try:
                record = self.load(path)
            except (SidecarIOError, SidecarFormatError) as ex:
                logger.warning("Skipping unreadable signature file %s: %s", path, ex)
                continue
            if record.payload.group_id == group_id:
                matches.append(path)
        return matches

    def cleanup_orphans(self) -> List[Path]:
        """
        Delete sidecars whose signed document no longer exists.

        A sidecar is orphaned when neither the document named in its payload
        nor any same-stem file besides itself is present in the directory.
        Unreadable sidecars are never deleted.

        Returns:
            Paths of deleted sidecars
        """
        removed = []
        for path in self.list_sidecars():
            try:
                record = self.load(path)
            except (SidecarIOError, SidecarFormatError) as ex:
                logger.warning("Skipping unreadable signature file %s: %s", path, ex)
                continue

            if (self.directory / record.payload.document_file_name).is_file():
                continue
            if self._has_same_stem_document(path):
                continue

            try:
                path.unlink()
            except OSError as ex:
                raise SidecarIOError(f"Cannot remove signature file {path}: {ex}") from ex
            logger.info("Removed orphaned signature file %s", path)
            removed.append(path)

        return removed

    def _has_same_stem_document(self, sidecar: Path) -> bool:
        for candidate in self.directory.iterdir():
            if candidate.suffix == SIDECAR_EXTENSION or not candidate.is_file():
                continue
            if candidate.stem == sidecar.stem:
                return True
        return False
