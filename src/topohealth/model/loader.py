"""Document loader from JSON to validated input models.

Reads the snapshot and IS-IS documents from files or raw bytes,
parses JSON and decodes the trees into the optional-field models
in topohealth.model.documents.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from topohealth.errors import DocumentLoadError, DocumentValidationError
from topohealth.logging import get_logger
from topohealth.model.documents import IsisDocument, SnapshotDocument

logger = get_logger(__name__)


class DocumentLoader:
    """Loads and validates the input documents.

    Example:
        loader = DocumentLoader()
        snapshot, isis = loader.load("snapshot.json", "isis-db.json")
    """

    def load(
        self,
        snapshot_path: Path | str,
        isis_path: Path | str,
    ) -> tuple[SnapshotDocument, IsisDocument]:
        """Load both documents from disk.

        Raises:
            DocumentLoadError: If a file cannot be read or is not a JSON object
            DocumentValidationError: If a document has the wrong shape
        """
        snapshot_raw = self.read_json(snapshot_path, label="Snapshot")
        isis_raw = self.read_json(isis_path, label="ISIS")
        return self.decode_snapshot(snapshot_raw), self.decode_isis(isis_raw)

    def read_json(self, path: Path | str, label: str = "Document") -> dict[str, Any]:
        """Read a JSON object from a file."""
        path = Path(path)
        if not path.exists():
            raise DocumentLoadError(
                f"{label} file not found: {path}",
                {"path": str(path)},
            )

        try:
            content = path.read_bytes()
        except OSError as e:
            raise DocumentLoadError(
                f"Cannot read {label.lower()} file: {e}",
                {"path": str(path)},
            ) from e

        logger.info("Read %s file %s (%d bytes)", label, path, len(content))
        return self.parse_json(content, label=label)

    def parse_json(self, content: bytes | str, label: str = "Document") -> dict[str, Any]:
        """Parse a JSON object from raw content."""
        try:
            data = json.loads(content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DocumentLoadError(
                f"{label} file contains invalid JSON",
                {"error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise DocumentLoadError(
                f"{label} file must contain a JSON object",
                {"type": type(data).__name__},
            )

        return data

    def decode_snapshot(self, data: dict[str, Any]) -> SnapshotDocument:
        """Decode a raw snapshot tree."""
        try:
            return SnapshotDocument.from_raw(data)
        except ValidationError as e:
            raise DocumentValidationError(
                f"Snapshot validation failed: {e.error_count()} errors",
                {"errors": e.errors(include_url=False)},
            ) from e

    def decode_isis(self, data: dict[str, Any]) -> IsisDocument:
        """Decode a raw IS-IS database tree."""
        try:
            return IsisDocument.model_validate(data)
        except ValidationError as e:
            raise DocumentValidationError(
                f"IS-IS validation failed: {e.error_count()} errors",
                {"errors": e.errors(include_url=False)},
            ) from e


def load_documents(
    snapshot_path: Path | str,
    isis_path: Path | str,
) -> tuple[SnapshotDocument, IsisDocument]:
    """Convenience wrapper around DocumentLoader.load."""
    return DocumentLoader().load(snapshot_path, isis_path)
