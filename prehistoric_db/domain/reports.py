"""Run summaries for the migration and the sample data seeder."""

from dataclasses import dataclass, field


@dataclass
class MigrationReport:
    """What one migration run did. Observational only."""

    database: str
    collections_created: list[str] = field(default_factory=list)
    collections_existing: list[str] = field(default_factory=list)
    collections_failed: dict[str, str] = field(default_factory=dict)
    indexes_declared: int = 0
    indexes_failed: dict[str, str] = field(default_factory=dict)
    """Index name -> error message."""

    config_upserted: bool = False
    admin_created: bool = False
    step_errors: dict[str, str] = field(default_factory=dict)
    """Step name (config, admin) -> error message."""

    document_counts: dict[str, int] = field(default_factory=dict)

    @property
    def collection_count(self) -> int:
        """Collections present after the run (created or already there)."""
        return len(self.collections_created) + len(self.collections_existing)

    @property
    def succeeded(self) -> bool:
        return not (self.collections_failed or self.indexes_failed or self.step_errors)


@dataclass(frozen=True)
class SeedReport:
    """Sample documents inserted per collection (0 when already populated)."""

    inserted: dict[str, int]
    failed: dict[str, str] = field(default_factory=dict)
    """Collection name -> error message."""

    @property
    def total_inserted(self) -> int:
        return sum(self.inserted.values())

    @property
    def succeeded(self) -> bool:
        return not self.failed
