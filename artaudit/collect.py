"""Repository enumeration, release lookup and artifact collection.

All three components talk to the remote platform one call at a time and
absorb per-repository failures so that sibling repositories are still
processed.
"""
import logging
from decimal import Decimal

import requests

from artaudit.core._dataclasses import ArtifactRecord
from artaudit.core._validators import _validate_repository
from artaudit.iou.parsers import _readartifacts, _readreleasetag

from artaudit.core._typing import (
    Any, Dict, Iterator, List, Optional, Tuple,
)

logger = logging.getLogger(__name__)

# failures absorbed per repository
API_ERRORS = (requests.RequestException, ValueError)


class RepositoryEnumerator:
    """Lists the user's own repositories, then those of every organization."""

    def __init__(self, client: Any, repo_limit: int = 1000, stream: Optional[Any] = None) -> None:
        self.client = client
        self.repo_limit = repo_limit
        self.stream = stream

    def _owner_repositories(self, owner: str) -> Iterator[str]:
        try:
            for repository in self.client.list_repositories(owner, limit=self.repo_limit):
                try:
                    yield _validate_repository(repository)
                except ValueError as e:
                    logger.warning(f"Skipping repository entry of {owner}: {e}")
        except API_ERRORS as e:
            logger.warning(f"Could not list repositories of {owner}: {e}")
            print(f"⚠️  Failed to list repositories of {owner}", file=self.stream)

    def _organizations(self) -> List[str]:
        try:
            return [org for org in self.client.list_organizations() if org]
        except API_ERRORS as e:
            logger.warning(f"Could not list organizations: {e}")
            print("⚠️  Failed to list organizations", file=self.stream)
            return []

    def iter_repositories(self, login: str) -> Iterator[str]:
        print(f"📂 Getting personal repositories for {login}...", file=self.stream)
        yield from self._owner_repositories(login)

        print(file=self.stream)
        print("👥 Fetching organizations...", file=self.stream)
        for org in self._organizations():
            print(f"📂 Repos in org: {org}", file=self.stream)
            yield from self._owner_repositories(org)


class ReleaseResolver:
    """Looks up the latest release tag of a repository, once per run."""

    def __init__(self, client: Any, release_tags: Dict[str, str], stream: Optional[Any] = None) -> None:
        self.client = client
        self.release_tags = release_tags
        self.stream = stream
        self._resolved: Dict[str, Optional[str]] = {}

    def resolve(self, repository: str) -> Optional[str]:
        if repository in self._resolved:
            return self._resolved[repository]

        try:
            tag = _readreleasetag(self.client.latest_release(repository))
        except API_ERRORS as e:
            logger.warning(f"Could not fetch latest release of {repository}: {e}")
            print(f"⚠️  Failed to fetch latest release for {repository}", file=self.stream)
            tag = None

        self._resolved[repository] = tag
        if tag:
            self.release_tags[repository] = tag
        return tag


class ArtifactCollector:
    """Fetches and normalizes the artifacts of one repository."""

    def __init__(self, client: Any, stream: Optional[Any] = None) -> None:
        self.client = client
        self.stream = stream

    def collect(self, repository: str) -> Tuple[List[ArtifactRecord], Decimal]:
        """ Collects retained artifacts of `repository`.

        Returns:
            Tuple[List[ArtifactRecord], Decimal]: records with a positive size and
                the sum of their `size_mb`. A failed listing yields no records.
        """
        try:
            raws = self.client.list_artifacts(repository)
        except API_ERRORS as e:
            logger.warning(f"Could not list artifacts of {repository}: {e}")
            print(f"⚠️  Failed to list artifacts for {repository}", file=self.stream)
            return [], Decimal(0)

        records = _readartifacts(repository, raws or [])
        if not records:
            print(f"   No artifacts in {repository}", file=self.stream)
            return [], Decimal(0)

        total_mb = sum((record.size_mb for record in records), Decimal(0))
        logger.info(f"{repository}: {len(records)} artifacts, {total_mb} MB")
        return records, total_mb
