"""Railway PostgreSQL through the Railway CLI."""

from typing import Dict

from dbsetup.errors import SetupCancelled
from dbsetup.models import ProviderChoice
from dbsetup.providers import parsers
from dbsetup.providers.base import BaseProvider

PUBLIC_URL_KEY = "DATABASE_PUBLIC_URL"
INTERNAL_URL_KEY = "DATABASE_URL"

POLL_ATTEMPTS = 5
POLL_DELAY_SECONDS = 2.0


class RailwayProvider(BaseProvider):
    choice = ProviderChoice.RAILWAY
    title = "Railway"
    cli = ["bunx", "@railway/cli"]
    install_cmd = ["bun", "install", "@railway/cli", "--no-save"]
    dashboard_url = "https://railway.com/dashboard"
    manual_steps = (
        "Create a project and add a PostgreSQL database",
        "Open the Postgres service and go to the 'Variables' tab",
        f"Copy the {PUBLIC_URL_KEY} value",
    )
    manual_prompt = f"Paste your {PUBLIC_URL_KEY} here:"

    def provision_with_cli(self) -> str:
        self.ensure_cli()
        self.ensure_auth()

        if not self.prompts.confirm(
            "Do you want to create/link a Railway project with PostgreSQL?", default=True
        ):
            raise SetupCancelled("Railway setup skipped.")

        self.console.print("[blue]Initializing Railway project...[/blue]")
        if not self.run_cli("init", interactive=True).ok:
            raise self.creation_failed("project")

        self.console.print("[blue]Adding PostgreSQL database...[/blue]")
        if not self.run_cli("add", "--database", "postgres", interactive=True).ok:
            raise self.creation_failed(
                "PostgreSQL database", hints=["Try manually with 'railway add'"]
            )

        self.console.print("[blue]Linking project...[/blue]")
        if not self.run_cli("link", interactive=True).ok:
            raise self.creation_failed("project link")

        self.console.print(f"[blue]Fetching {PUBLIC_URL_KEY}...[/blue]")
        urls: Dict[str, str] = {}

        def public_url_ready() -> bool:
            urls.update(self.get_database_urls())
            return bool(urls.get(PUBLIC_URL_KEY))

        self.wait_until(public_url_ready, POLL_DELAY_SECONDS, POLL_ATTEMPTS, PUBLIC_URL_KEY)

        self.console.print("[green]Railway PostgreSQL is ready![/green]")
        self.console.print("[dim]Internal (for Railway deployments):[/dim]")
        self.console.print(urls.get(INTERNAL_URL_KEY) or "Not found", markup=False)
        self.console.print(
            f"[yellow]Use {PUBLIC_URL_KEY} for local migrations and development[/yellow]"
        )
        return urls[PUBLIC_URL_KEY]

    def get_database_urls(self) -> Dict[str, str]:
        result = self.run_cli("variables", "--kv")
        if not result.ok:
            self.logger.debug("Failed to fetch Railway variables: %s", result.stderr.strip())
            return {}

        variables = parsers.parse_kv_lines(result.stdout)
        return {
            key: variables[key]
            for key in (INTERNAL_URL_KEY, PUBLIC_URL_KEY)
            if variables.get(key)
        }
