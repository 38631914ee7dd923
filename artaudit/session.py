import logging

from artaudit.collect import ArtifactCollector, ReleaseResolver, RepositoryEnumerator
from artaudit.core._dataclasses import PruneSummary
from artaudit.core.classifier import ReleaseClassifier
from artaudit.core.store import ArtifactStore
from artaudit.iou.planters import ReportPlanter
from artaudit.prune import PruningSession

from artaudit.core._typing import (
    Any, Callable, Optional,
)

logger = logging.getLogger(__name__)


class AuditSession:
    """ Owns the state of one audit run and drives its phases.

    Collection visits repositories one at a time: the latest release is
    resolved first, then the artifacts are listed. Reporting runs after
    collection has finished and pruning runs last.

    Args:
        client: collaborator implementing the platform API
        ask: decision function for the pruning phase
        repo_limit: maximum repositories listed per owner
        web_url: platform web root for artifact links
        stream: text stream for the output, stdout if None
    """

    def __init__(
            self,
            client: Any,
            ask: Callable[[str], str],
            repo_limit: int = 1000,
            web_url: str = "https://github.com",
            stream: Optional[Any] = None,
            ) -> None:

        self.client = client
        self.ask = ask
        self.web_url = web_url
        self.stream = stream

        self.store = ArtifactStore()
        self.enumerator = RepositoryEnumerator(client, repo_limit=repo_limit, stream=stream)
        self.resolver = ReleaseResolver(client, self.store.release_tags, stream=stream)
        self.collector = ArtifactCollector(client, stream=stream)
        self.classifier = ReleaseClassifier(self.store.release_tags)

    def process_repository(self, repository: str) -> None:
        print(f"🔍 Checking {repository}...", file=self.stream)
        self.resolver.resolve(repository)

        records, total_mb = self.collector.collect(repository)
        for record in records:
            self.store.add(record)
        self.store.set_repo_total(repository, total_mb)

    def collect(self, login: str) -> ArtifactStore:
        for repository in self.enumerator.iter_repositories(login):
            self.process_repository(repository)

        logger.info(
            f"Collected {len(self.store)} artifacts from {len(self.store.repo_totals)} repositories"
        )
        return self.store

    def report(self) -> None:
        planter = ReportPlanter(self.store, stream=self.stream)
        planter.plant_summary()
        planter.plant_total()

    def prune(self) -> PruneSummary:
        session = PruningSession(
            self.store,
            self.classifier,
            self.client,
            ask=self.ask,
            web_url=self.web_url,
            stream=self.stream,
        )
        summary = session.run()
        logger.info(f"Pruning finished: {summary}")
        return summary

    def run(self, login: str) -> PruneSummary:
        print("Starting artifact audit...", file=self.stream)
        self.collect(login)
        self.report()
        summary = self.prune()
        print(summary, file=self.stream)
        return summary
