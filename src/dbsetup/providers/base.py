"""Provider adapter contract and the steps every provider shares."""

import os
import secrets
import string
import webbrowser
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

from dbsetup.constants import PASSWORD_LENGTH
from dbsetup.errors import OutputParseError, ProviderFallback, SetupError
from dbsetup.errors_catalog import actionable_error
from dbsetup.models import CommandResult, ProviderChoice
from dbsetup.services.env_file import mask_url
from dbsetup.services.validation import validate_connection_string, validate_resource_name


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_identifier(length: int = 6) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


class BaseProvider(ABC):
    """Provisions a PostgreSQL database and returns its connection string.

    Subclasses implement ``provision_with_cli``. Any ``ProviderFallback`` it
    raises (missing CLI, failed login, connection string not resolvable) hands
    over to the manual dashboard flow; other ``SetupError`` instances end the
    run.
    """

    choice: ProviderChoice
    title: str = ""
    cli: List[str] = []
    install_cmd: Optional[List[str]] = None
    auth_check_args: List[str] = ["whoami"]
    login_args: List[str] = ["login"]
    dashboard_url: str = ""
    manual_steps: Sequence[str] = ()
    manual_prompt: str = "Paste your connection string here:"

    def __init__(
        self,
        runner,
        prompts,
        poller,
        logger,
        console,
        cwd: Optional[str] = None,
        browser_opener=webbrowser.open,
    ):
        self.runner = runner
        self.prompts = prompts
        self.poller = poller
        self.logger = logger
        self.console = console
        self.browser_opener = browser_opener
        self.cwd = cwd or os.getcwd()

    def provision(self) -> str:
        self.console.rule(f"[magenta]{self.title} Setup[/magenta]")
        try:
            database_url = self.provision_with_cli()
        except ProviderFallback as exc:
            self.logger.warning(str(exc))
            self.console.print(f"[yellow]{exc}[/yellow]")
            self.console.print("[blue]Switching to manual setup...[/blue]")
            database_url = self.provision_manually()

        self.console.print(f"[green]{self.title} PostgreSQL configured successfully![/green]")
        self.logger.info("%s connection string: %s", self.title, mask_url(database_url))
        return database_url

    @abstractmethod
    def provision_with_cli(self) -> str:
        """Create the database through the provider CLI."""

    def cli_cmd(self, *args: str) -> List[str]:
        return list(self.cli) + list(args)

    def run_cli(self, *args: str, interactive: bool = False, redact: Sequence[str] = ()) -> CommandResult:
        return self.runner.run(self.cli_cmd(*args), interactive=interactive, redact=redact)

    @property
    def install_hint(self) -> str:
        return " ".join(self.install_cmd) if self.install_cmd else " ".join(self.cli)

    def ensure_cli(self):
        if self.run_cli("--version").ok:
            return

        self.console.print(f"[yellow]{self.title} CLI is not installed.[/yellow]")
        if self.install_cmd and self.prompts.confirm(
            f"Would you like to install {self.title} CLI automatically?", default=True
        ):
            self.console.print(f"[blue]Installing {self.title} CLI...[/blue]")
            installed = self.runner.run(self.install_cmd, interactive=True)
            if installed.ok and self.run_cli("--version").ok:
                self.console.print(f"[green]{self.title} CLI installed successfully![/green]")
                return
            self.console.print(f"[red]Failed to install {self.title} CLI automatically.[/red]")

        raise ProviderFallback(
            actionable_error("cli_missing", provider=self.title, install_hint=self.install_hint)
        )

    def ensure_auth(self):
        self.console.print(f"[blue]Checking {self.title} authentication...[/blue]")
        if self.run_cli(*self.auth_check_args).ok:
            self.console.print(f"[green]Already logged in to {self.title}.[/green]")
            return

        self.console.print(f"[yellow]Not logged in to {self.title}.[/yellow]")
        self.console.print("[cyan]Opening authentication flow. Follow the link if the browser does not open.[/cyan]")
        login = self.run_cli(*self.login_args, interactive=True)
        if not login.ok or not self.run_cli(*self.auth_check_args).ok:
            raise ProviderFallback(
                actionable_error(
                    "auth_failed",
                    provider=self.title,
                    login_hint=" ".join(self.cli_cmd(*self.login_args)),
                )
            )

        self.console.print(f"[green]Successfully authenticated with {self.title}![/green]")

    def ask_region(self, regions: Sequence[Tuple[str, str]], default: str) -> str:
        return self.prompts.select(f"Choose your {self.title} region:", regions, default=default)

    def ask_name(
        self,
        message: str,
        default: str,
        label: str = "Project name",
        allow_underscore: bool = False,
    ) -> str:
        return self.prompts.text(
            message,
            default=default,
            validate=lambda value: validate_resource_name(
                value, label=label, allow_underscore=allow_underscore
            ),
        )

    def wait_until(
        self,
        check_ready: Callable[[], bool],
        delay_seconds: float,
        max_attempts: int,
        description: str,
    ):
        if self.poller.wait_until(check_ready, delay_seconds, max_attempts, description):
            return
        raise ProviderFallback(
            actionable_error(
                "poll_timeout",
                provider=self.title,
                what=description,
                attempts=str(max_attempts),
                dashboard_url=self.dashboard_url,
            )
        )

    def creation_failed(self, resource: str, hints: Sequence[str] = ()) -> SetupError:
        if hints:
            self.console.print("[yellow]Possible reasons:[/yellow]")
            for hint in hints:
                self.console.print(f"[dim]  - {hint}[/dim]")
        return SetupError(
            actionable_error(
                "creation_failed",
                provider=self.title,
                resource=resource,
                dashboard_url=self.dashboard_url,
            )
        )

    def parse_failure(self, what: str, raw_output: str) -> OutputParseError:
        self.logger.debug("Raw output for %s: %s", what, raw_output)
        if raw_output.strip():
            self.console.print("[yellow]Raw output:[/yellow]")
            self.console.print(raw_output, markup=False)
        return OutputParseError(
            actionable_error("parse_failed", what=what, provider=self.title),
            raw_output=raw_output,
        )

    def open_browser(self, url: str):
        try:
            opened = self.browser_opener(url)
        except webbrowser.Error as exc:
            self.logger.debug("Could not open browser: %s", exc)
            opened = False

        if opened:
            self.console.print("[green]Browser opened![/green]")
        else:
            self.console.print(f"[cyan]Go to: {url}[/cyan]")

    def provision_manually(self) -> str:
        self.console.print(f"[blue]Manual {self.title} PostgreSQL Setup[/blue]")
        self.console.print("[cyan]Follow these steps to create your database:[/cyan]")
        self.console.print(f"  1. Go to: {self.dashboard_url}")
        for index, step in enumerate(self.manual_steps, start=2):
            self.console.print(f"  {index}. {step}")

        if self.prompts.confirm(
            f"Would you like to open the {self.title} dashboard in your browser?", default=True
        ):
            self.open_browser(self.dashboard_url)

        self.console.print("[yellow]Waiting for you to create the database...[/yellow]")
        return self.prompts.text(self.manual_prompt, validate=validate_connection_string)
