"""Neon serverless PostgreSQL through neonctl."""

from dbsetup.errors import OutputParseError, ProviderFallback
from dbsetup.models import ProviderChoice
from dbsetup.providers import parsers
from dbsetup.providers.base import BaseProvider

# neonctl has no command to list regions.
NEON_REGIONS = [
    ("aws-us-east-1", "AWS US East (N. Virginia)"),
    ("aws-us-east-2", "AWS US East (Ohio)"),
    ("aws-us-west-2", "AWS US West (Oregon)"),
    ("aws-eu-central-1", "AWS Europe (Frankfurt)"),
    ("aws-eu-west-2", "AWS Europe (London)"),
    ("aws-ap-southeast-1", "AWS Asia Pacific (Singapore)"),
    ("aws-ap-southeast-2", "AWS Asia Pacific (Sydney)"),
    ("aws-sa-east-1", "AWS South America (Sao Paulo)"),
    ("azure-eastus2", "Azure East US 2 (Virginia)"),
    ("azure-westus3", "Azure West US 3 (Arizona)"),
    ("azure-gwc", "Azure Germany West Central (Frankfurt)"),
]

DEFAULT_REGION = "aws-us-east-2"
DEFAULT_ROLE = "neondb_owner"


class NeonProvider(BaseProvider):
    choice = ProviderChoice.NEON
    title = "Neon"
    cli = ["npx", "neonctl"]
    auth_check_args = ["me"]
    login_args = ["auth"]
    dashboard_url = "https://console.neon.tech/app/projects"
    manual_steps = (
        "Click 'New Project' and choose a name and region",
        "Open 'Connection Details' on the project dashboard",
        "Copy the pooled connection string",
    )

    def provision_with_cli(self) -> str:
        self.ensure_cli()
        self.ensure_auth()

        region = self.ask_region(NEON_REGIONS, DEFAULT_REGION)
        project_name = self.ask_name("Enter a name for your Neon project:", default="my-neon-project")

        project_id, project_region = self.create_project(project_name, region)
        branch_id = self.get_default_branch(project_id)

        try:
            database_url = self.get_connection_string(project_id, branch_id)
        except OutputParseError as exc:
            failure = self.parse_failure("the connection string", exc.raw_output)
            raise ProviderFallback(str(failure)) from exc

        self.console.print(f"[green]Project ID: {project_id}[/green]")
        self.console.print(f"[green]Region: {project_region or region}[/green]")
        return database_url

    def create_project(self, project_name: str, region: str):
        self.console.print(f"[blue]Creating Neon project '{project_name}'...[/blue]")
        self.console.print(
            "[yellow]Tip: when asked 'use this organization by default?', select 'yes'.[/yellow]"
        )

        created = self.run_cli(
            "projects", "create", "--name", project_name, "--region-id", region, interactive=True
        )
        if not created.ok:
            raise self.creation_failed("project", hints=["Project limit reached for the organization"])

        self.console.print("[blue]Fetching project details...[/blue]")
        # Attached first so neonctl can ask for an organization, then captured for JSON.
        listed = self.run_cli("projects", "list", "--output", "json", interactive=True)
        if listed.ok:
            listed = self.run_cli("projects", "list", "--output", "json")
        if not listed.ok:
            raise self.parse_failure("the project list", listed.stderr)

        try:
            project_id, project_region = parsers.parse_neon_project(listed.stdout, project_name)
        except OutputParseError as exc:
            raise self.parse_failure("the project list", exc.raw_output) from exc

        self.console.print(f"[green]Project created successfully: {project_id}[/green]")
        return project_id, project_region

    def get_default_branch(self, project_id: str) -> str:
        result = self.run_cli(
            "branches", "list", "--project-id", project_id, "--output", "json"
        )
        if not result.ok:
            raise self.parse_failure("the branch list", result.stderr)

        try:
            return parsers.parse_neon_default_branch(result.stdout)
        except OutputParseError as exc:
            raise self.parse_failure("the branch list", exc.raw_output) from exc

    def get_connection_string(self, project_id: str, branch_id: str) -> str:
        result = self.run_cli(
            "connection-string",
            "--project-id",
            project_id,
            "--branch-id",
            branch_id,
            "--role-name",
            DEFAULT_ROLE,
            "--pooled",
        )
        if not result.ok:
            raise ProviderFallback(f"Failed to get connection string. {result.stderr.strip()}")
        return parsers.parse_neon_connection_string(result.stdout)

