"""Render PostgreSQL through the Render CLI."""

from typing import Any, Dict

from dbsetup.errors import OutputParseError, ProviderFallback
from dbsetup.models import ProviderChoice
from dbsetup.providers import parsers
from dbsetup.providers.base import BaseProvider
from dbsetup.services.validation import validate_connection_string

RENDER_REGIONS = [
    ("oregon", "Oregon (US West)"),
    ("ohio", "Ohio (US East)"),
    ("frankfurt", "Frankfurt (Europe)"),
    ("singapore", "Singapore (Asia)"),
]

DEFAULT_REGION = "oregon"
READY_STATUSES = {"available", "running"}

POLL_ATTEMPTS = 30
POLL_DELAY_SECONDS = 10.0


class RenderProvider(BaseProvider):
    choice = ProviderChoice.RENDER
    title = "Render"
    cli = ["render"]
    install_cmd = ["npm", "install", "-g", "render"]
    dashboard_url = "https://dashboard.render.com/new/database"
    manual_steps = (
        "Click 'New PostgreSQL'",
        "Choose a name and region",
        "Select the 'Free' plan (or your preferred plan)",
        "Click 'Create Database'",
        "Once created, find the 'External Database URL' section",
        "Copy the connection string",
    )
    manual_prompt = "Paste your External Database URL here:"

    def provision_with_cli(self) -> str:
        self.ensure_cli()
        self.ensure_auth()

        region = self.ask_region(RENDER_REGIONS, DEFAULT_REGION)
        name = self.ask_name(
            "Enter a name for your database:", default="my-render-db", label="Database name"
        )

        self.create_database(name, region)
        service = self.wait_for_service(name)

        database_url = parsers.render_connection_string(service)
        if database_url:
            return database_url

        self.console.print(
            "[yellow]Please check your Render dashboard for the External Database URL.[/yellow]"
        )
        self.console.print("[cyan]https://dashboard.render.com[/cyan]")
        return self.prompts.text(self.manual_prompt, validate=validate_connection_string)

    def create_database(self, name: str, region: str):
        self.console.print(f"[blue]Creating Render PostgreSQL database '{name}'...[/blue]")
        created = self.run_cli(
            "services",
            "create",
            "postgres",
            "--name",
            name,
            "--region",
            region,
            "--plan",
            "free",
            interactive=True,
        )
        if not created.ok:
            raise self.creation_failed(
                "database",
                hints=["A free database already exists on this workspace", "Name already in use"],
            )

    def wait_for_service(self, name: str) -> Dict[str, Any]:
        self.console.print(
            "[blue]Waiting for database to provision (this may take 2-3 minutes)...[/blue]"
        )
        self.console.print("[dim]You can also check status at: https://dashboard.render.com[/dim]")

        found: Dict[str, Any] = {}

        def service_available() -> bool:
            result = self.run_cli("services", "list", "--output", "json")
            if not result.ok:
                return False
            try:
                service = parsers.find_render_service(result.stdout, name)
            except OutputParseError as exc:
                raise ProviderFallback(
                    str(self.parse_failure("the service list", exc.raw_output))
                ) from exc
            if service is None:
                return False
            found.update(service)
            return parsers.render_service_status(service) in READY_STATUSES

        self.wait_until(service_available, POLL_DELAY_SECONDS, POLL_ATTEMPTS, "database status")
        self.console.print("[green]Database is available.[/green]")
        return found
