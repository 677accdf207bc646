"""Provider adapters keyed by ``ProviderChoice``."""

from typing import Dict, Type

from dbsetup.errors import SetupError
from dbsetup.models import ProviderChoice
from dbsetup.providers.base import BaseProvider
from dbsetup.providers.local_docker import LocalDockerProvider
from dbsetup.providers.manual import ManualProvider
from dbsetup.providers.neon import NeonProvider
from dbsetup.providers.railway import RailwayProvider
from dbsetup.providers.render import RenderProvider
from dbsetup.providers.supabase import SupabaseProvider
from dbsetup.providers.vercel import VercelProvider

PROVIDERS: Dict[ProviderChoice, Type[BaseProvider]] = {
    ProviderChoice.NEON: NeonProvider,
    ProviderChoice.SUPABASE: SupabaseProvider,
    ProviderChoice.RAILWAY: RailwayProvider,
    ProviderChoice.RENDER: RenderProvider,
    ProviderChoice.VERCEL: VercelProvider,
    ProviderChoice.LOCAL: LocalDockerProvider,
    ProviderChoice.MANUAL: ManualProvider,
}


def get_provider_class(choice: ProviderChoice) -> Type[BaseProvider]:
    try:
        return PROVIDERS[choice]
    except KeyError as exc:
        raise SetupError(f"Unknown provider: {choice}") from exc


__all__ = ["BaseProvider", "PROVIDERS", "get_provider_class"]
