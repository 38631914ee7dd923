import os
import sys
import json
import logging

import jsonschema
import requests

from artaudit.core.helpers import deep_override

CONFIG_DIR = os.path.join(os.path.dirname(__file__), 'config')


def load_config(config_path: str, jsonschema_path: str, overrides: dict = None) -> dict:
    """ Loads the JSON configuration, applies CLI overrides and validates it.

    Args:
        config_path (str): configuration file
        jsonschema_path (str): JSON schema of the configuration
        overrides (dict, optional): dotted key -> value, None values are ignored

    Raises:
        FileNotFoundError: If either file is missing.
        ValueError: If the configuration does not match the schema.

    Returns:
        dict: validated configuration
    """
    try:
        with open(config_path, "r") as f:
            cfg = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for arg, value in (overrides or {}).items():
        if value is not None:
            cfg = deep_override(cfg, arg.split("."), value)

    try:
        with open(jsonschema_path, "r") as f:
            schema = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found: {jsonschema_path}")

    try:
        jsonschema.validate(cfg, schema)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Invalid config: {e}")

    return cfg


def main(argv=None, ask=None):
    from artaudit.core._validators import _validate_path
    from artaudit.core.helpers import default_log_path
    from artaudit.cli import batch, prompt
    from artaudit.iou.client import NotAuthenticatedError, client_from_config
    from artaudit.session import AuditSession

    config_path = os.environ.get("ARTAUDIT_CONFIG", os.path.join(CONFIG_DIR, 'config.json'))
    jsonschema_path = os.environ.get("ARTAUDIT_JSONSCHEMA", os.path.join(CONFIG_DIR, 'schema.json'))

    # Parse CLI arguments
    args = batch.parse_arguments(argv)

    # Validate custom config path if provided
    if args.custom_config_path:
        config_path = _validate_path(args.custom_config_path, name='config file')

    cfg = load_config(
        config_path,
        jsonschema_path,
        overrides={"global_settings.log_level": args.log_level},
    )

    # Instantiate basic logger
    logging.basicConfig(
        level=getattr(logging, cfg["global_settings"]["log_level"]),
        format='%(asctime)s - %(levelname)s - %(message)s',
        filename=default_log_path(),
        filemode="w",
    )
    logger = logging.getLogger(__name__)

    # Fail fast without a usable login
    try:
        client = client_from_config(cfg)
        login = client.current_user()
    except NotAuthenticatedError as e:
        logger.error(f"Authentication failed: {e}")
        print(
            f"ERROR: {e} Set GITHUB_TOKEN (or GH_TOKEN) or run `gh auth login`.",
            file=sys.stderr,
        )
        sys.exit(2)
    except requests.RequestException as e:
        logger.error(f"Could not resolve the current user: {e}")
        print(f"ERROR: could not reach the GitHub API: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info(f"Authenticated as {login}")
    print("Fetching artifact usage for all accessible repositories...")
    print()

    session = AuditSession(
        client,
        ask=ask if ask is not None else prompt.ask,
        repo_limit=cfg["api"]["repo_limit"],
        web_url=cfg["api"]["web_url"],
    )
    session.run(login)
    return 0


if __name__ == "__main__":
    sys.exit(main())
