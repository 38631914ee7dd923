import logging

from artaudit.core._dataclasses import ArtifactRecord
from artaudit.core._validators import _validate_size

from artaudit.core._typing import (
    Any, Iterable, List, Optional, RawRecord,
)

logger = logging.getLogger(__name__)


def _readprnumber(raw: RawRecord) -> Optional[int]:
    """Number of the first pull request attached to the triggering workflow run."""
    workflow_run = raw.get("workflow_run")
    if not isinstance(workflow_run, dict):
        return None

    pull_requests = workflow_run.get("pull_requests")
    if not isinstance(pull_requests, list) or not pull_requests:
        return None

    first = pull_requests[0]
    if not isinstance(first, dict):
        return None

    number = first.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        return None
    return number


def _readartifact(repository: str, raw: Any) -> Optional[ArtifactRecord]:
    """ Normalizes one raw artifact object.

    Args:
        repository (str): `owner/name` the artifact belongs to
        raw (Any): JSON object from the artifact listing

    Returns:
        Optional[ArtifactRecord]: the record, or None when it has no usable size or id
    """
    if not isinstance(raw, dict):
        logger.warning(f"Dropping malformed artifact entry in {repository}: {raw!r}")
        return None

    try:
        size_bytes = _validate_size(raw.get("size_in_bytes"))
    except ValueError as e:
        logger.debug(f"Dropping artifact {raw.get('id')} in {repository}: {e}")
        return None

    artifact_id = raw.get("id")
    if artifact_id is None or isinstance(artifact_id, bool):
        logger.warning(f"Dropping artifact without id in {repository}")
        return None

    return ArtifactRecord(
        repository=repository,
        artifact_id=artifact_id,
        name=str(raw.get("name") or ""),
        size_bytes=size_bytes,
        created_at=str(raw.get("created_at") or ""),
        associated_pr=_readprnumber(raw),
    )


def _readartifacts(repository: str, raws: Iterable[Any]) -> List[ArtifactRecord]:
    records = []
    for raw in raws:
        record = _readartifact(repository, raw)
        if record is not None:
            records.append(record)
    return records


def _readreleasetag(raw: Optional[RawRecord]) -> Optional[str]:
    if not isinstance(raw, dict):
        return None

    tag = raw.get("tag_name")
    if not isinstance(tag, str) or not tag:
        return None
    return tag
