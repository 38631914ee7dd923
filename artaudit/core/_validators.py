import os

from artaudit.core._typing import (
    Union, Any, PathLike,
)


def _validate_int(
    name: str,
    value: Union[int, float],
    min_value: int = 0,
    mxn_value: Union[int, None] = None,
    ) -> Union[int, None]:
    """Checks whether the parameter is either
    an int or float that can be cast to an integer
    without loss of accuracy. Raises a ValueError otherwise.

    Args:
        name (str): Parameter name for error messages.
        value (Union[int, float]): The value to validate.
        min_value (int, optional): Minimum allowed value. Defaults to 0.
        mxn_value (Union[int, None], optional): Maximum allowed value. Defaults to None.

    Raises:
        ValueError: If value is not a valid integer within the specified range.

    Returns:
        Union[int, None]: The validated integer value, or None if input was None.
    """

    if value is None:
        return value

    messsage = f"Parameter `{name}` expected to be an {min_value} <= integer <= {mxn_value}"
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool):
        raise ValueError(messsage)

    if isinstance(value, float):
        if int(value) != value:
            raise ValueError(messsage)
        value = int(value)

    if not isinstance(value, int):
        raise ValueError(messsage)

    if mxn_value is not None:
        assert mxn_value >= min_value
        if value > mxn_value:
            raise ValueError(messsage)

    if value < min_value:
        raise ValueError(messsage)

    return int(value)


def _validate_size(value: Any) -> int:
    """ Validates the `size_in_bytes` field of an artifact record.

    Accepts a non-negative JSON number or a string made of digits only,
    and requires the size to be strictly positive.

    Args:
        value (Any): raw size field

    Raises:
        ValueError: If the size is missing, non-numeric or not positive.

    Returns:
        int: size in bytes
    """
    if value is None:
        raise ValueError("Parameter `size_in_bytes` is missing")

    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Parameter `size_in_bytes` is not numeric: {value!r}")
        value = int(value)

    return _validate_int("size_in_bytes", value, min_value=1)


def _validate_repository(name: str) -> str:
    """ Checks the repository identifier has the `owner/name` form.

    Raises:
        ValueError: If the identifier is empty or not exactly two non-empty parts.
    """
    message = f"Repository `{name}` expected in the form `owner/name`"
    if not isinstance(name, str):
        raise ValueError(message)

    parts = name.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(message)

    return name.strip()


def _validate_path(
        f_path: Union[str, bytes, PathLike],
        name: str = "file or directory",
    ) -> str:

    """ Checks if the path exists and the user has read access.

    Args:
        path: The path to validate (string).

    Raises:
        ValueError: If the path does not exist or is not readable.
    """
    # Ensure path is absolute and normalized
    f_path = os.path.abspath(os.path.realpath(f_path))
    path_str = str(f_path)
    message = f"Path to {name} does not exist or user does not have read permisson: {path_str}"

    if not os.path.exists(f_path):
        raise ValueError(message)

    if os.path.isfile(f_path):
        try:
            with open(f_path, "rb"):
                pass
        except OSError:
            raise ValueError(message)
    else:
        try:
            os.listdir(f_path)
        except PermissionError:
            raise ValueError(message)

    return path_str
