import argparse


def parse_arguments(argv=None):
    """ Custom CLI definition

    The audit runs without any flag; the options only override configuration.

    Returns:
        parser: CLI arguments
    """
    parser = argparse.ArgumentParser(
        prog="artaudit",
        description="Audit and interactively prune CI artifacts across all accessible repositories.",
    )

    # Overwrite settings with custom config file
    parser.add_argument("--custom_config_path", type=str, help="Path to configuration file")

    # Verbosity of the log file
    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level of the log file",
    )

    return parser.parse_args(argv)
