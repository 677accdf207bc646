"""Supabase projects through the supabase CLI."""

from dbsetup.errors import OutputParseError, SetupError
from dbsetup.models import ProviderChoice
from dbsetup.providers import parsers
from dbsetup.providers.base import BaseProvider, generate_password
from dbsetup.services.validation import validate_org_name

SUPABASE_REGIONS = [
    ("ap-southeast-1", "Southeast Asia (Singapore)"),
    ("ap-southeast-2", "Asia Pacific (Sydney)"),
    ("ap-south-1", "Asia Pacific (Mumbai)"),
    ("ap-northeast-1", "Asia Pacific (Tokyo)"),
    ("ap-northeast-2", "Asia Pacific (Seoul)"),
    ("us-east-1", "US East (N. Virginia)"),
    ("us-west-1", "US West (Oregon)"),
    ("ca-central-1", "Canada (Central)"),
    ("eu-central-1", "Europe (Frankfurt)"),
    ("eu-west-2", "Europe (London)"),
    ("sa-east-1", "South America (Sao Paulo)"),
]

DEFAULT_REGION = "ap-south-1"

CREATION_HINTS = (
    "You've reached the free project limit (2 projects)",
    "Project name already exists",
    "Organization quota exceeded",
    "Delete or pause an existing project, upgrade your plan, or use a different organization",
)


def build_pooler_url(project_ref: str, password: str, region: str) -> str:
    return (
        f"postgresql://postgres.{project_ref}:{password}"
        f"@aws-0-{region}.pooler.supabase.com:6543/postgres"
    )


class SupabaseProvider(BaseProvider):
    choice = ProviderChoice.SUPABASE
    title = "Supabase"
    cli = ["npx", "supabase"]
    auth_check_args = ["orgs", "list"]
    dashboard_url = "https://supabase.com/dashboard/projects"
    manual_steps = (
        "Click 'New project', choose an organization, name, password and region",
        "Open 'Connect' on the project page once it is ready",
        "Copy the connection pooler URI and replace [YOUR-PASSWORD]",
    )

    def provision_with_cli(self) -> str:
        self.ensure_cli()
        self.ensure_auth()
        self.ensure_organization()

        region = self.ask_region(SUPABASE_REGIONS, DEFAULT_REGION)
        project_name = self.ask_name(
            "Enter a name for your Supabase project:", default="my-supabase-project"
        )

        password = generate_password()
        self.console.print("[dim]Generated secure database password[/dim]")

        project_ref, project_region = self.create_project(project_name, password, region)
        database_url = build_pooler_url(project_ref, password, project_region or region)

        self.console.print(f"[green]Project ID: {project_ref}[/green]")
        self.console.print(f"[green]Region: {project_region or region}[/green]")
        self.console.print(f"[dim]Save this password safely: {password}[/dim]")
        self.console.print(
            f"[dim]Dashboard: https://supabase.com/dashboard/project/{project_ref}[/dim]"
        )
        return database_url

    def ensure_organization(self):
        self.console.print("[blue]Checking organizations...[/blue]")
        result = self.run_cli("orgs", "list")
        if not result.ok:
            raise SetupError(f"Failed to list Supabase orgs. {result.stderr.strip()}")

        if parsers.count_supabase_orgs(result.stdout) > 0:
            return

        self.console.print("[yellow]No Supabase organizations found.[/yellow]")
        if not self.prompts.confirm(
            "Would you like to create a new Supabase organization?", default=True
        ):
            raise SetupError(
                "Cannot continue without a Supabase organization. "
                "You can create one later at: https://supabase.com/dashboard"
            )

        org_name = self.prompts.text(
            "Enter a name for your new Supabase organization:", validate=validate_org_name
        )
        self.console.print(f"[blue]Creating Supabase organization '{org_name}'...[/blue]")
        if not self.run_cli("orgs", "create", org_name, interactive=True).ok:
            raise self.creation_failed("organization")
        self.console.print("[green]Organization created![/green]")

    def create_project(self, project_name: str, password: str, region: str):
        self.console.print(
            f"[blue]Creating Supabase project '{project_name}' in {region}...[/blue]"
        )
        self.console.print("[dim]This may take 2-3 minutes. Please wait...[/dim]")

        created = self.run_cli(
            "projects",
            "create",
            project_name,
            "--db-password",
            password,
            "--region",
            region,
            "--plan",
            "free",
            interactive=True,
            redact=[password],
        )
        if not created.ok:
            error = self.creation_failed("project", hints=CREATION_HINTS)
            self.offer_logout()
            raise error

        self.console.print("[blue]Fetching project details...[/blue]")
        listed = self.run_cli("projects", "list", "--output", "json")
        if not listed.ok:
            raise self.parse_failure("the project list", listed.stderr)

        try:
            return parsers.parse_supabase_project(listed.stdout, project_name)
        except OutputParseError as exc:
            raise self.parse_failure("the project list", exc.raw_output) from exc

    def offer_logout(self):
        if not self.prompts.confirm(
            "Would you like to logout and try with a different account?", default=False
        ):
            return

        self.console.print("[blue]Logging out from Supabase...[/blue]")
        if self.run_cli("logout", interactive=True).ok:
            self.console.print("[green]Successfully logged out from Supabase.[/green]")
            self.console.print("[cyan]Run the setup again to login with a different account.[/cyan]")
        else:
            self.console.print("[red]Failed to logout.[/red]")
