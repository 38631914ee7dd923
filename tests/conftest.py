import pytest
import requests

MB = 1024 * 1024


def artifact(artifact_id, name, size, created_at="2024-05-01T10:00:00Z", pr=None):
    raw = {
        "id": artifact_id,
        "name": name,
        "size_in_bytes": size,
        "created_at": created_at,
        "workflow_run": {"id": 1000 + artifact_id, "pull_requests": []},
    }
    if pr is not None:
        raw["workflow_run"]["pull_requests"] = [{"number": pr}]
    return raw


class FakeClient:
    """In-memory stand-in for the GitHub collaborator."""

    def __init__(self, login="alice", repos=None, orgs=None, releases=None, artifacts=None):
        self.login = login
        self.repos = repos or {}
        self.orgs = orgs or []
        self.releases = releases or {}
        self.artifacts = artifacts or {}
        self.failing_artifacts = set()
        self.failing_deletes = set()
        self.release_calls = []
        self.artifact_calls = []
        self.deleted = []

    def current_user(self):
        return self.login

    def list_repositories(self, owner, limit=None):
        return iter(self.repos.get(owner, [])[:limit])

    def list_organizations(self):
        return iter(self.orgs)

    def latest_release(self, repository):
        self.release_calls.append(repository)
        tag = self.releases.get(repository)
        return {"tag_name": tag} if tag else None

    def list_artifacts(self, repository):
        self.artifact_calls.append(repository)
        if repository in self.failing_artifacts:
            raise requests.HTTPError(f"500 listing artifacts of {repository}")
        return list(self.artifacts.get(repository, []))

    def delete_artifact(self, repository, artifact_id):
        if artifact_id in self.failing_deletes:
            return 403, "Forbidden"
        self.deleted.append((repository, artifact_id))
        return 204, ""


class ScriptedAnswers:
    """Decision function returning prepared answers in order."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)


@pytest.fixture
def fake_client():
    return FakeClient(
        repos={
            "alice": ["alice/dotfiles", "alice/site"],
            "acme": ["acme/widgets", "acme/empty"],
        },
        orgs=["acme"],
        releases={"acme/widgets": "v2.0.0"},
        artifacts={
            "alice/site": [artifact(1, "site-preview", 5 * MB, pr=42)],
            "acme/widgets": [
                artifact(2, "build-v2.0.0-linux", 10 * MB),
                artifact(3, "coverage", 50 * MB),
            ],
        },
    )
