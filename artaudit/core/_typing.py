from os import PathLike

from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
    cast,
)

# raw JSON object as returned by the REST API
RawRecord = Dict[str, Any]
