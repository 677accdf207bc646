"""Vercel Postgres through the Vercel CLI."""

import os
import tempfile

from dbsetup.models import ProviderChoice
from dbsetup.providers import parsers
from dbsetup.providers.base import BaseProvider

CONNECTION_VARIABLE = "POSTGRES_URL"

POLL_ATTEMPTS = 5
POLL_DELAY_SECONDS = 3.0

ENV_TAB_STEPS = (
    "Go to the '.env.local' tab",
    f"Copy the {CONNECTION_VARIABLE} value",
)


class VercelProvider(BaseProvider):
    choice = ProviderChoice.VERCEL
    title = "Vercel"
    cli = ["vercel"]
    install_cmd = ["npm", "install", "-g", "vercel"]
    dashboard_url = "https://vercel.com/dashboard/stores"
    manual_steps = (
        "Click 'Create Database' and select 'Postgres'",
        "Choose a name and region for your database, then click 'Create'",
    ) + ENV_TAB_STEPS
    manual_prompt = f"Paste your {CONNECTION_VARIABLE} here:"

    def provision_with_cli(self) -> str:
        self.ensure_cli()
        self.ensure_auth()

        name = self.ask_name(
            "Enter a name for your database:",
            default="my-vercel-db",
            label="Database name",
            allow_underscore=True,
        )

        self.console.print(f"[blue]Creating Vercel Postgres database '{name}'...[/blue]")
        self.console.print("[cyan]The Vercel CLI will guide you through the setup process.[/cyan]")
        self.console.print(f"[cyan]Use '{name}' when the CLI asks for the database name.[/cyan]")
        if not self.run_cli("postgres", "create", interactive=True).ok:
            raise self.creation_failed("Postgres database")
        self.console.print("[green]Database created![/green]")

        # The database exists now; a fallback only needs to locate it.
        self.manual_steps = (f"Find your database: {name}",) + ENV_TAB_STEPS

        self.console.print("[blue]Fetching connection string...[/blue]")
        pulled = {}

        def connection_string_exposed() -> bool:
            value = self.pull_connection_string()
            if value:
                pulled["url"] = value
            return bool(value)

        self.wait_until(
            connection_string_exposed, POLL_DELAY_SECONDS, POLL_ATTEMPTS, CONNECTION_VARIABLE
        )
        self.console.print("[green]Connection string retrieved![/green]")
        return pulled["url"]

    def pull_connection_string(self):
        fd, env_path = tempfile.mkstemp(prefix="vercel-env-", suffix=".local")
        os.close(fd)
        try:
            result = self.run_cli("env", "pull", env_path, "--yes")
            if not result.ok:
                return None
            with open(env_path, "r", encoding="utf-8") as file_obj:
                return parsers.parse_dotenv_value(file_obj.read(), CONNECTION_VARIABLE)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.debug("Could not read %s: %s", env_path, exc)
            return None
        finally:
            if os.path.exists(env_path):
                try:
                    os.remove(env_path)
                except OSError as exc:
                    self.logger.warning("Could not remove %s: %s", env_path, exc)
