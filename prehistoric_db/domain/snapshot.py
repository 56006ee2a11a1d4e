"""Backup snapshot models: on-disk metadata, listing entries, restore results.

SnapshotMetadata is the schema of ``metadata.json``. Field names on disk are
camelCase (documentCount, byteSize, totalDocuments) so snapshots stay
readable by the application backend's tooling; older snapshots that carry
``size`` instead of ``byteSize`` still load.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from prehistoric_db.core.constants import SNAPSHOT_FORMAT_VERSION


class CollectionSummary(BaseModel):
    """Per-collection entry in snapshot metadata."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    document_count: int = Field(default=0, alias="documentCount")
    byte_size: int = Field(
        default=0,
        validation_alias=AliasChoices("byteSize", "size", "byte_size"),
        serialization_alias="byteSize",
    )
    error: str | None = None


class SnapshotMetadata(BaseModel):
    """Describes one snapshot: capture time, source database, per-collection counts.

    total_documents is kept equal to the sum of per-collection counts by
    add_collection(); build metadata through it rather than appending to
    collections directly.
    """

    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime
    database: str
    collections: list[CollectionSummary] = Field(default_factory=list)
    total_documents: int = Field(default=0, alias="totalDocuments")
    version: str = SNAPSHOT_FORMAT_VERSION

    def add_collection(self, summary: CollectionSummary) -> None:
        """Append a collection summary and fold its count into the total."""
        self.collections.append(summary)
        self.total_documents += summary.document_count

    def to_json(self) -> str:
        """Serialize with on-disk field names; error is omitted when unset."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


@dataclass(frozen=True)
class SnapshotInfo:
    """A snapshot directory found under the backup root."""

    name: str
    path: Path
    created_at: datetime
    """Filesystem creation time (birth time where recorded, else mtime)."""

    documents: int | None = None
    """Total documents from metadata; None when metadata is unreadable."""

    collections: int | None = None
    """Number of collections in metadata; None when metadata is unreadable."""


@dataclass
class RestoreResult:
    """Outcome of restoring one snapshot."""

    snapshot_path: Path
    restored: dict[str, int] = field(default_factory=dict)
    """Collection name -> number of documents inserted."""

    skipped: list[str] = field(default_factory=list)
    """Collections left untouched (missing file or empty array)."""

    failed: dict[str, str] = field(default_factory=dict)
    """Collection name -> error message."""

    metadata: SnapshotMetadata | None = None

    @property
    def total_restored(self) -> int:
        return sum(self.restored.values())
