import os
from platform import system
from decimal import Decimal, ROUND_HALF_UP

from artaudit.core._typing import (
    Union,
)

BYTES_PER_MB = 1024 * 1024
_TWO_PLACES = Decimal("0.01")

# ----------------------- HELPER FUNCTIONS ------------------------------

def default_log_path():
    """Returns a platform-specific default log file path."""
    log_name = "artaudit.log"

    this_system = system()

    if this_system == "Windows":
        log_path = os.path.join(os.environ["APPDATA"], "Local", "artaudit")

    elif this_system == "Linux" or this_system == "Darwin":
        log_path = os.path.join(os.path.expanduser("~"), ".artaudit", "logs")

    else:
        # Fallback to a generic location for other systems
        log_path = ""

    try:
        os.makedirs(log_path, exist_ok=True)
    except OSError as e:
        print(f"Error creating log directory: {e}. Generic location will be used instead.")
        log_path = ""

    return os.path.join(log_path, f"{log_name}")


def deep_override(cfg_dict: dict, keys: list, value):
    """ Override value in nested dictionary fields.

    Args:
        cfg_dict (dict): source nested dictionary
        keys (list): list of keys sorted from the top to bottom level
        value (_type_): value to be stored

    Raises:
        KeyError: if the last key does not exist in the nested dictionary

    Returns:
        dict: the updated dictionary
    """
    current_dict = cfg_dict

    for key in keys[:-1]:  # Iterate through all keys except the last one
        current_dict = current_dict[key]  # Directly access nested dicts
    if keys[-1] in current_dict:
        current_dict[keys[-1]] = value
    else:
        raise KeyError(f"Invalid key `{keys[-1]}`")

    return cfg_dict


def bytes_to_mb(size_bytes: Union[int, Decimal]) -> Decimal:
    """Converts bytes to megabytes rounded to two decimal places."""
    return (Decimal(size_bytes) / BYTES_PER_MB).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def artifact_url(web_url: str, repository: str) -> str:
    """Link to the Actions page listing the artifacts of a repository."""
    return f"{web_url.rstrip('/')}/{repository}/actions"
