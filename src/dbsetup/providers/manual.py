"""Connection string supplied directly by the user."""

from dbsetup.models import ProviderChoice
from dbsetup.providers.base import BaseProvider
from dbsetup.services.validation import validate_connection_string


class ManualProvider(BaseProvider):
    choice = ProviderChoice.MANUAL
    title = "Manual"

    def provision(self) -> str:
        return self.provision_with_cli()

    def provision_with_cli(self) -> str:
        return self.prompts.text(
            "Enter your PostgreSQL connection string:", validate=validate_connection_string
        )
