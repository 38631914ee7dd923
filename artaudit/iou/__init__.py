from .client import (
    GitHubClient as GitHubClient,
    NotAuthenticatedError as NotAuthenticatedError,
    client_from_config as client_from_config,
    get_token as get_token,
)

from .parsers import (
    _readartifact as readartifact,
    _readartifacts as readartifacts,
    _readreleasetag as readreleasetag,
)

from .planters import (
    ReportPlanter as ReportPlanter,
)
