import os
import shutil
import logging
import subprocess

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from artaudit.core._typing import (
    Any, Dict, Iterator, List, Mapping, Optional, RawRecord, Tuple,
)

logger = logging.getLogger(__name__)

API = "https://api.github.com"


class NotAuthenticatedError(RuntimeError):
    """No usable credentials for the remote platform."""


def get_token() -> Optional[str]:
    """Token from GITHUB_TOKEN / GH_TOKEN, falling back to `gh auth token`."""
    token = os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")
    if token:
        return token

    if shutil.which("gh") is None:
        return None

    try:
        token = subprocess.check_output(
            ["gh", "auth", "token"], universal_newlines=True, stderr=subprocess.DEVNULL,
        ).strip()
    except (OSError, subprocess.CalledProcessError) as e:
        logger.warning(f"`gh auth token` failed: {e}")
        return None

    return token or None


class GitHubClient:
    """ Thin REST client for the repository, release and artifact endpoints.

    Every call is synchronous. HTTP errors propagate as `requests` exceptions,
    callers decide whether a failure is fatal.

    Args:
        token: bearer token
        base_url: REST API root
        per_page: page size for listing endpoints
        timeout: seconds per request
        api_version: value of the `X-GitHub-Api-Version` header
        retries: retry budget for transient 5xx answers
        session: preconfigured session, mainly for tests
    """

    def __init__(
            self,
            token: str,
            base_url: str = API,
            per_page: int = 100,
            timeout: float = 30.0,
            api_version: str = "2022-11-28",
            retries: int = 3,
            session: Optional[requests.Session] = None,
            ) -> None:

        if not token:
            raise NotAuthenticatedError("No GitHub token available.")

        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.timeout = timeout
        self.login: Optional[str] = None

        if session is None:
            session = requests.Session()
            retry = Retry(
                total=retries,
                backoff_factor=0.5,
                status_forcelist=(500, 502, 503, 504),
                allowed_methods=frozenset({"GET", "DELETE"}),
                respect_retry_after_header=True,
            )
            session.mount("https://", HTTPAdapter(max_retries=retry))

        session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
            "User-Agent": "artaudit",
        })
        self.session = session

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> requests.Response:
        r = self.session.get(self._url(path), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r

    def _paged(
            self,
            path: str,
            key: Optional[str] = None,
            params: Optional[Mapping[str, Any]] = None,
            limit: Optional[int] = None,
            ) -> Iterator[RawRecord]:
        """Yields items page by page until a short or empty page (or `limit`)."""
        page = 1
        count = 0
        while True:
            query = {**(params or {}), "per_page": self.per_page, "page": page}
            data = self._get(path, params=query).json()
            if key is not None:
                if not isinstance(data, dict):
                    raise ValueError(f"Unexpected payload from {path}: {type(data).__name__}")
                items = data.get(key) or []
            elif isinstance(data, list):
                items = data
            else:
                raise ValueError(f"Unexpected payload from {path}: {type(data).__name__}")
            if not items:
                break
            for item in items:
                yield item
                count += 1
                if limit is not None and count >= limit:
                    return
            if len(items) < self.per_page:
                break
            page += 1

    # ----------------------- collaborator API -----------------------

    def current_user(self) -> str:
        try:
            r = self._get("/user")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code in (401, 403):
                raise NotAuthenticatedError(
                    f"GitHub rejected the token ({e.response.status_code})."
                ) from e
            raise

        data = r.json()
        login = data.get("login") if isinstance(data, dict) else None
        if not isinstance(login, str) or not login:
            raise NotAuthenticatedError("GitHub did not report a login for the token.")

        self.login = login
        return self.login

    def list_repositories(self, owner: str, limit: Optional[int] = None) -> Iterator[str]:
        if self.login is not None and owner == self.login:
            items = self._paged("/user/repos", params={"affiliation": "owner"}, limit=limit)
        else:
            items = self._paged(f"/orgs/{owner}/repos", params={"type": "all"}, limit=limit)

        for repo in items:
            full_name = repo.get("full_name")
            if full_name:
                yield full_name

    def list_organizations(self) -> Iterator[str]:
        for org in self._paged("/user/orgs"):
            login = org.get("login")
            if login:
                yield login

    def latest_release(self, repository: str) -> Optional[RawRecord]:
        try:
            r = self._get(f"/repos/{repository}/releases/latest")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                return None
            raise
        return r.json()

    def list_artifacts(self, repository: str) -> List[RawRecord]:
        return list(self._paged(f"/repos/{repository}/actions/artifacts", key="artifacts"))

    def delete_artifact(self, repository: str, artifact_id: int) -> Tuple[int, str]:
        r = self.session.delete(
            self._url(f"/repos/{repository}/actions/artifacts/{artifact_id}"),
            timeout=self.timeout,
        )
        return r.status_code, r.text


def client_from_config(cfg: Dict[str, Any], token: Optional[str] = None) -> GitHubClient:
    """Builds a client from the `api` section of the configuration."""
    api_cfg = cfg["api"]
    return GitHubClient(
        token=token if token is not None else get_token(),
        base_url=api_cfg["base_url"],
        per_page=api_cfg["per_page"],
        timeout=api_cfg["timeout"],
        api_version=api_cfg["api_version"],
        retries=api_cfg["retries"],
    )
