"""console-http CLI entry point.

Issues a single request against the console API and prints the normalized
result.
"""

import json
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
import requests
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import ConfigManager, ConsoleHttpConfig
from ..exceptions import ConfigurationError
from ..infrastructure.http import Err, HttpClient
from ..logging import LoggingConfig, configure_logging, get_logger

console = Console()
err_console = Console(stderr=True)

EXIT_APPLICATION_ERROR = 1
EXIT_FAILURE = 2

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def setup_logging(config: ConsoleHttpConfig, verbose: int = 0) -> None:
    """Configure logging from the [logging] section; -v/-vv raise verbosity."""
    configure_logging(LoggingConfig.from_section(
        config.logging,
        verbose=verbose,
        service_name="console-http-cli",
        version=__version__,
    ))


def report_configuration_error(error: ConfigurationError) -> None:
    err_console.print(f"[red]Configuration error:[/red] {escape(error.message)}")
    if error.help_text:
        err_console.print(escape(error.help_text))
    err_console.print(f"[dim]Error ID: {error.correlation_id}[/dim]")


def parse_pairs(ctx, param, values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated key=value options."""
    pairs = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}")
        pairs[key] = value
    return pairs


def parse_json_body(ctx, param, value: Optional[str]):
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError as e:
        raise click.BadParameter(f"invalid JSON: {e}")


@click.group()
@click.version_option(version=__version__, prog_name="console-http")
def cli():
    """HTTP client for the admin console API."""


@cli.command()
@click.argument("method", type=click.Choice(HTTP_METHODS, case_sensitive=False))
@click.argument("path")
@click.option("--config", "-c", "config_file", type=click.Path(path_type=Path),
              help="Configuration file path")
@click.option("--base-url", help="Base URL (overrides configuration)")
@click.option("--json", "json_body", callback=parse_json_body, help="JSON request body")
@click.option("--param", "-p", "params", multiple=True, callback=parse_pairs,
              help="Query parameter as key=value (repeatable)")
@click.option("--header", "-H", "headers", multiple=True, callback=parse_pairs,
              help="Extra header as key=value (repeatable)")
@click.option("--retry", type=click.IntRange(min=0), default=None,
              help="Total attempts when the request times out")
@click.option("--retry-delay", type=click.IntRange(min=0), default=None,
              help="Milliseconds to wait before each retry")
@click.option("--timeout", type=click.IntRange(min=1), default=None,
              help="Request timeout in milliseconds")
@click.option("--token", help="Remember-me token")
@click.option("--fingerprint", help="Browser fingerprint")
@click.option("--verbose", "-v", count=True, help="Increase verbosity")
def request(method, path, config_file, base_url, json_body, params, headers,
            retry, retry_delay, timeout, token, fingerprint, verbose):
    """Send METHOD PATH and print the response data."""
    try:
        config = ConfigManager(config_file).load_config(
            base_url=base_url,
            remember_me_token=token,
            browser_fingerprint=fingerprint,
        )
    except ConfigurationError as e:
        report_configuration_error(e)
        sys.exit(EXIT_FAILURE)

    setup_logging(config, verbose)
    logger = get_logger("console_http.cli")
    logger.info("console-http CLI started", version=__version__, method=method, path=path)

    try:
        with HttpClient.from_config(config.client) as client:
            result = client.request(
                method,
                path,
                params=params or None,
                json=json_body,
                headers=headers,
                retry=retry,
                retry_delay=retry_delay,
                timeout=timeout,
            )
    except ConfigurationError as e:
        logger.error("Request rejected", **e.to_dict())
        report_configuration_error(e)
        sys.exit(EXIT_FAILURE)
    except requests.RequestException as e:
        attempts = getattr(e, "retry_attempts", 1)
        err_console.print(f"[red]Request failed[/red] after {attempts} attempt(s): {escape(str(e))}")
        sys.exit(EXIT_FAILURE)

    if isinstance(result, Err):
        err_console.print(f"[red]Error[/red] (HTTP {result.status}): {escape(result.message)}")
        sys.exit(EXIT_APPLICATION_ERROR)

    console.print_json(data=result.data)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
