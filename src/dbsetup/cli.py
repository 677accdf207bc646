import logging
import os
import signal

import click
from rich.logging import RichHandler

from .constants import DEFAULT_CONFIG_FILE
from .core import DatabaseSetup, SetupError
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _handle_sigterm(signum, frame):
    raise KeyboardInterrupt


_console_handler = RichHandler(rich_tracebacks=True, show_level=False, show_path=False)

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[_console_handler],
)


@click.command()
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
def main(config, verbose, log_file):
    """Provision a PostgreSQL database and write its URL to your .env file."""
    logger = logging.getLogger("dbsetup")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except SetupError as exc:
        raise click.ClickException(str(exc)) from exc

    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        _console_handler.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)
        _console_handler.setLevel(logging.WARNING)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)
        if not verbose:
            logger.setLevel(logging.INFO)

    try:
        setup = DatabaseSetup(
            provider=config_values.get("provider"),
            env_path=config_values.get("env_path"),
            variable_name=config_values.get("variable_name"),
        )
    except SetupError as exc:
        raise click.ClickException(str(exc)) from exc

    signal.signal(signal.SIGTERM, _handle_sigterm)
    raise SystemExit(setup.run())


if __name__ == "__main__":
    main()
