from artaudit.core.helpers import bytes_to_mb
from artaudit.core.store import ArtifactStore

from artaudit.core._typing import (
    Any, List, Optional,
)


class ReportPlanter:
    """Renders the storage summary of an `ArtifactStore`.

    Attributes:
        store: collected artifacts and totals
        stream: text stream for the output, stdout if None
    """

    store: ArtifactStore

    def __init__(
            self,
            store: ArtifactStore,
            stream: Optional[Any] = None,
            ) -> None:

        self.store = store
        self.stream = stream

    def _print(self, line: str = "") -> None:
        print(line, file=self.stream)

    def summary_lines(self) -> List[str]:
        return [
            f"📂 {repository:<50} {total} MB"
            for repository, total in self.store.ranked_totals()
        ]

    def total_line(self) -> str:
        return f"🧮 Total Storage Used: {bytes_to_mb(self.store.global_total_bytes())} MB"

    def plant_summary(self) -> None:
        if not self.store.repo_totals:
            self._print("No artifacts found.")
            return

        self._print()
        self._print("Artifact Usage Summary:")
        self._print()
        for line in self.summary_lines():
            self._print(line)

    def plant_total(self) -> None:
        self._print(self.total_line())
