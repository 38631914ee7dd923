from artaudit.core._typing import (
    Mapping,
)


class ReleaseClassifier:
    """Decides whether an artifact belongs to the latest release of its repository.

    The check is a plain case-sensitive substring test of the release tag
    within the artifact name. Names that happen to contain the tag are
    protected as well, and release builds named without the tag are not.
    """

    def __init__(self, release_tags: Mapping[str, str]) -> None:
        self.release_tags = release_tags

    def is_protected(self, repository: str, artifact_name: str) -> bool:
        tag = self.release_tags.get(repository)
        if not tag:
            return False

        return tag in artifact_name
