from dataclasses import dataclass
from decimal import Decimal

from artaudit.core.helpers import bytes_to_mb

from artaudit.core._typing import (
    Optional,
)


@dataclass(frozen=True)
class ArtifactRecord:
    repository: str
    artifact_id: int
    name: str
    size_bytes: int
    created_at: str
    associated_pr: Optional[int] = None

    @property
    def size_mb(self) -> Decimal:
        return bytes_to_mb(self.size_bytes)


@dataclass()
class PruneSummary:
    """ Outcome counters of one pruning session.

    Attributes:
        deleted: artifacts removed from the platform
        failed: confirmed deletions the API refused
        skipped: artifacts the operator declined
        protected: artifacts skipped as part of the latest release
        quit: operator ended the review early
    """
    deleted: int = 0
    failed: int = 0
    skipped: int = 0
    protected: int = 0
    quit: bool = False

    def __str__(self) -> str:
        return (
            f"Deleted: {self.deleted}, failed: {self.failed}, "
            f"skipped: {self.skipped}, protected: {self.protected}"
        )
