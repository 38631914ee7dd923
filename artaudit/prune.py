"""Interactive review of collected artifacts, largest first."""
import enum
import logging

import requests

from artaudit.core._dataclasses import ArtifactRecord, PruneSummary
from artaudit.core.classifier import ReleaseClassifier
from artaudit.core.helpers import artifact_url
from artaudit.core.store import ArtifactStore

from artaudit.core._typing import (
    Any, Callable, Optional,
)

logger = logging.getLogger(__name__)

PROMPT = "Do you want to delete this artifact? (y/n/q to quit): "
DELETED_STATUS = (200, 202, 204)


class Decision(enum.Enum):
    DELETE = "delete"
    SKIP = "skip"
    QUIT = "quit"


def parse_choice(answer: Optional[str]) -> Decision:
    """Maps an operator answer to a decision. Anything unrecognized skips."""
    choice = (answer or "").strip().lower()
    if choice in ("y", "yes"):
        return Decision.DELETE
    if choice in ("q", "quit"):
        return Decision.QUIT
    return Decision.SKIP


class PruningSession:
    """ Walks all artifacts by size and asks what to do with each.

    Protected artifacts are skipped without a prompt. A `quit` answer ends
    the session; the remaining artifacts are left untouched.

    Args:
        store: collected artifacts
        classifier: latest-release check
        client: collaborator providing `delete_artifact(repository, artifact_id)`
        ask: decision function, receives the prompt and returns the raw answer
        web_url: platform web root used for the artifact link
        stream: text stream for the output, stdout if None
    """

    def __init__(
            self,
            store: ArtifactStore,
            classifier: ReleaseClassifier,
            client: Any,
            ask: Callable[[str], str],
            web_url: str = "https://github.com",
            stream: Optional[Any] = None,
            ) -> None:

        self.store = store
        self.classifier = classifier
        self.client = client
        self.ask = ask
        self.web_url = web_url
        self.stream = stream

    def _print(self, line: str = "") -> None:
        print(line, file=self.stream)

    def show(self, record: ArtifactRecord) -> None:
        self._print()
        self._print(f"Artifact in repo: {record.repository}")
        self._print(f"Artifact Name: {record.name}")
        self._print(f"Size: {record.size_mb} MB")
        self._print(f"Created: {record.created_at}")
        if record.associated_pr is not None:
            self._print(f"Associated with PR #{record.associated_pr}")
        self._print(f"View artifact: {artifact_url(self.web_url, record.repository)}")

    def delete(self, record: ArtifactRecord) -> bool:
        try:
            status, text = self.client.delete_artifact(record.repository, record.artifact_id)
        except requests.RequestException as e:
            logger.warning(f"Deleting artifact {record.artifact_id} in {record.repository} failed: {e}")
            return False

        if status in DELETED_STATUS:
            logger.info(f"Deleted artifact {record.artifact_id} ({record.name}) in {record.repository}")
            return True

        logger.warning(
            f"Deleting artifact {record.artifact_id} in {record.repository} "
            f"returned {status}: {text}"
        )
        return False

    def run(self) -> PruneSummary:
        summary = PruneSummary()

        if not len(self.store):
            self._print("No artifacts to review for deletion.")
            return summary

        self._print()
        self._print("Reviewing artifacts for deletion...")
        self._print()

        for record in self.store.ranked_records():
            if self.classifier.is_protected(record.repository, record.name):
                self._print(
                    f"⏭️  Skipping {record.name} in {record.repository} "
                    "(associated with latest release)"
                )
                summary.protected += 1
                continue

            self.show(record)
            decision = parse_choice(self.ask(PROMPT))

            if decision is Decision.QUIT:
                self._print("Exiting artifact review.")
                summary.quit = True
                break

            if decision is Decision.SKIP:
                self._print(f"⏭️  Skipping artifact {record.name}")
                summary.skipped += 1
                continue

            if self.delete(record):
                self.store.remove(record)
                self._print(f"✅ Artifact {record.name} deleted.")
                summary.deleted += 1
            else:
                self._print(f"❌ Failed to delete artifact {record.name}.")
                summary.failed += 1

        return summary
