from decimal import Decimal

from artaudit.core._dataclasses import ArtifactRecord

from artaudit.core._typing import (
    Dict, List, Optional, Tuple,
)


class ArtifactStore:
    """In-memory accumulation of everything collected during one run.

    Attributes:
        records: retained artifacts in collection order
        repo_totals: per-repository sum of `size_mb`, positive totals only
        release_tags: latest release tag per repository, where one exists
    """

    records: List[ArtifactRecord]
    repo_totals: Dict[str, Decimal]
    release_tags: Dict[str, str]

    def __init__(self) -> None:
        self.records = []
        self.repo_totals = {}
        self.release_tags = {}

    def add(self, record: ArtifactRecord) -> None:
        self.records.append(record)

    def remove(self, record: ArtifactRecord) -> None:
        self.records.remove(record)

    def set_repo_total(self, repository: str, total: Decimal) -> None:
        if total > 0:
            self.repo_totals[repository] = total

    def global_total_bytes(self) -> int:
        return sum(record.size_bytes for record in self.records)

    def ranked_totals(self) -> List[Tuple[str, Decimal]]:
        """Repository totals, largest first. Ties keep enumeration order."""
        return sorted(self.repo_totals.items(), key=lambda item: item[1], reverse=True)

    def ranked_records(self) -> List[ArtifactRecord]:
        """All records across repositories, largest first."""
        return sorted(self.records, key=lambda record: record.size_mb, reverse=True)

    def __len__(self) -> int:
        return len(self.records)
