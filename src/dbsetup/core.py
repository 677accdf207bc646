import logging
import os
from typing import Optional

from rich.console import Console

from .constants import (
    CUSTOM_CHOICE,
    ENV_PATH_CHOICES,
    PROVIDER_CHOICES,
    VARIABLE_NAME_CHOICES,
)
from .errors import SetupCancelled, SetupError
from .errors_catalog import actionable_error
from .models import EnvTarget, ProviderChoice
from .providers import get_provider_class
from .services.command_runner import CommandRunner
from .services.env_file import EnvFileService, mask_url
from .services.polling import PollingService
from .services.prompts import PromptService
from .services.validation import (
    is_connection_string,
    validate_env_path,
    validate_variable_name,
)

console = Console()
logger = logging.getLogger("dbsetup")


class DatabaseSetup:
    """Provision a PostgreSQL database and store its URL in an env file."""

    def __init__(
        self,
        provider: Optional[str] = None,
        env_path: Optional[str] = None,
        variable_name: Optional[str] = None,
        cwd: Optional[str] = None,
        runner=None,
        prompts=None,
        poller=None,
        env_file_service=None,
        provider_factory=get_provider_class,
    ):
        self.provider = self._parse_provider(provider)
        self.env_path = env_path
        self.variable_name = variable_name
        self.cwd = cwd or os.getcwd()

        self.command_runner = runner or CommandRunner(logger=logger)
        self.prompts = prompts or PromptService(console=console)
        self.polling_service = poller or PollingService(logger=logger, console=console)
        self.env_file_service = env_file_service or EnvFileService(logger=logger, console=console)
        self.provider_factory = provider_factory

    @staticmethod
    def _parse_provider(value: Optional[str]) -> Optional[ProviderChoice]:
        if value is None:
            return None
        try:
            return ProviderChoice(value)
        except ValueError as exc:
            valid = ", ".join(choice.value for choice in ProviderChoice)
            raise SetupError(f"Invalid provider '{value}'. Supported: {valid}") from exc

    def select_provider(self) -> ProviderChoice:
        if self.provider is not None:
            logger.info("Using provider from config: %s", self.provider.value)
            return self.provider
        return self.prompts.select(
            "Choose your PostgreSQL provider:", PROVIDER_CHOICES, default=ProviderChoice.NEON
        )

    def obtain_database_url(self, choice: ProviderChoice) -> str:
        provider_cls = self.provider_factory(choice)
        adapter = provider_cls(
            runner=self.command_runner,
            prompts=self.prompts,
            poller=self.polling_service,
            logger=logger,
            console=console,
            cwd=self.cwd,
        )
        return adapter.provision()

    def select_env_target(self) -> EnvTarget:
        console.rule("[blue]Environment Configuration[/blue]")

        env_path = self.env_path
        if env_path is None:
            env_path = self.prompts.select(
                "Select your .env file location:", ENV_PATH_CHOICES, default=".env"
            )
        if env_path == CUSTOM_CHOICE:
            env_path = self.prompts.text(
                "Enter custom path to your .env file:",
                validate=lambda value: validate_env_path(value, self.cwd),
            )
        resolved_path = self.env_file_service.resolve_path(env_path, self.cwd)

        variable_name = self.variable_name
        if variable_name is None:
            variable_name = self.prompts.select(
                "Select the environment variable name:",
                VARIABLE_NAME_CHOICES,
                default="DATABASE_URL",
            )
        if variable_name == CUSTOM_CHOICE:
            variable_name = self.prompts.text(
                "Enter custom variable name:", validate=validate_variable_name
            )
        error = validate_variable_name(variable_name)
        if error:
            raise SetupError(error)

        if self.env_file_service.has_variable(resolved_path, variable_name):
            console.print(f"[yellow]{variable_name} already exists in {env_path}[/yellow]")
            if not self.prompts.confirm(f"Overwrite existing {variable_name}?", default=False):
                raise SetupCancelled("Your existing configuration was not modified.")
        elif not os.path.exists(resolved_path):
            console.print(f"[dim]{env_path} will be created[/dim]")

        return EnvTarget(path=resolved_path, variable_name=variable_name)

    def write_database_url(self, database_url: str, target: EnvTarget):
        self.env_file_service.upsert(target.path, target.variable_name, database_url)
        console.print(f"[cyan]Location: {target.path}[/cyan]")
        console.print(f"[cyan]Variable: {target.variable_name}[/cyan]")

    def show_summary(self, database_url: str, target: EnvTarget):
        console.print("[green]Database configured successfully![/green]")
        console.print(f"{target.variable_name}={mask_url(database_url)}", style="dim", markup=False)
        console.print("[bold green]Setup completed successfully![/bold green]")
        console.print("[cyan]Next steps:[/cyan]")
        console.print("[dim]  1. Review your .env file[/dim]")
        console.print("[dim]  2. Run database migrations (if applicable)[/dim]")
        console.print("[dim]  3. Start your application[/dim]")

    def show_later_instructions(self):
        console.print("[dim]Skipping database setup.[/dim]")
        console.print("[dim]You can configure your database later by:[/dim]")
        console.print("[dim]  1. Creating a database with your preferred provider[/dim]")
        console.print("[dim]  2. Adding the connection string to your .env file[/dim]")
        console.print("[dim]  3. Running your database migrations[/dim]")

    def run(self) -> int:
        try:
            logger.info("Starting database setup...")
            console.rule("[bold cyan]Database Setup[/bold cyan]")
            console.print("[dim]Configure your PostgreSQL database with ease![/dim]")

            self.env_file_service.initialize_from_example(self.cwd)

            choice = self.select_provider()
            if choice == ProviderChoice.LATER:
                self.show_later_instructions()
                return 0

            database_url = self.obtain_database_url(choice)
            if not database_url or not is_connection_string(database_url):
                raise SetupError(actionable_error("invalid_connection_string"))

            target = self.select_env_target()
            self.write_database_url(database_url, target)
            self.show_summary(database_url, target)
            return 0

        except SetupCancelled as exc:
            console.print(f"[dim]Setup cancelled. {exc}[/dim]")
            logger.info("Setup cancelled: %s", exc)
            return 0
        except KeyboardInterrupt:
            console.print("[yellow]Setup cancelled by user.[/yellow]")
            logger.info("Operation cancelled by user")
            return 0
        except SetupError as exc:
            console.print(f"[bold red]Setup failed:[/bold red] {exc}")
            console.print("[dim]Tip: Run the command again or check the error message above.[/dim]")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
