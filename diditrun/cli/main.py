"""
Command-line interface for did-it-run.

Runs a command, then reports its outcome and duration through the
configured notification channels. The exit code is always the command's own
once it has run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, NoReturn, Optional, Tuple

import typer
from rich.console import Console

from diditrun import __version__, exit_codes
from diditrun.common.errors import ConfigurationError, DidItRunError, NotifierError
from diditrun.common.logging import configure_logging
from diditrun.config import (
    Config,
    Credentials,
    EmailConfig,
    MergeOptions,
    UserConfig,
    UserCredentials,
    default_config_files,
    default_credentials_files,
    load_file,
    merge,
)
from diditrun.incantation import Incantation, run as run_incantation
from diditrun.notifications import Notifier, RunFinished

logger = logging.getLogger(__name__)

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

app = typer.Typer(
    help="Run a command and get notified when it finishes.",
    add_completion=False,
)


def _report(error: BaseException) -> None:
    err_console.print(str(error), style="red", markup=False)
    if isinstance(error, DidItRunError):
        logger.debug("Reported %s", error.error_type, extra={"error": error.to_dict()})


def _fail(error: DidItRunError, code: int) -> NoReturn:
    _report(error)
    raise typer.Exit(code=code)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"diditrun {__version__}")
        raise typer.Exit()


def resolve_settings(
    cli_config: UserConfig,
    merge_options: MergeOptions,
    config_file: Optional[Path],
    credentials_file: Optional[Path],
) -> Tuple[Config, Credentials]:
    """Load, merge and validate config and credentials."""
    file_config = load_file(UserConfig, config_file, default_config_files())
    config = Config.from_user_config(merge(cli_config, file_config, merge_options))
    user_credentials = load_file(UserCredentials, credentials_file, default_credentials_files())
    credentials = Credentials.from_user_credentials(user_credentials)
    return config, credentials


@app.command(context_settings={"allow_interspersed_args": False})
def run(
    command: str = typer.Argument(..., help="Command to run."),
    arguments: Optional[List[str]] = typer.Argument(None, help="COMMAND arguments."),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        metavar="FILE",
        help="Path to config file.",
    ),
    credentials_file: Optional[Path] = typer.Option(
        None,
        "--credentials",
        metavar="FILE",
        help="Path to credentials file.",
    ),
    email: Optional[List[str]] = typer.Option(
        None,
        "--email",
        "-e",
        help="Email address to receive notifications; repeat for several.",
    ),
    no_email: bool = typer.Option(False, "--no-email", help="Do not send email notifications."),
    no_validate: bool = typer.Option(
        False,
        "--no-validate",
        help="Do not validate credentials and inputs.",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        min=0,
        help="Timeout in seconds for connecting to the mail server.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging on stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Run COMMAND with ARGUMENTS and notify when it finishes."""
    configure_logging(debug=debug, force=True)
    if no_email and email:
        raise typer.BadParameter("--no-email cannot be used with --email", param_hint="--no-email")

    incantation = Incantation.from_argv(command, arguments)
    cli_config = UserConfig(
        email=EmailConfig(recipients=list(email)) if email else None,
        validate_inputs=False if no_validate else None,
        timeout=timeout,
    )

    try:
        config, credentials = resolve_settings(
            cli_config,
            MergeOptions(no_email=no_email),
            config_file,
            credentials_file,
        )
    except ConfigurationError as exc:
        _fail(exc, exit_codes.CONFIG)

    try:
        notifier = Notifier(config, credentials)
    except NotifierError as exc:
        _fail(exc, exit_codes.FAILURE)

    with notifier:
        outcome = run_incantation(incantation)
        if outcome.error is not None:
            _report(outcome.error)
        event = RunFinished(
            incantation=incantation,
            exit_code=outcome.exit_code,
            elapsed=outcome.elapsed,
        )
        try:
            notifier.notify(event)
        except NotifierError as exc:
            _report(exc)

    raise typer.Exit(code=outcome.exit_code)


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
