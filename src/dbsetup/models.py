"""Shared domain models for dbsetup."""

from dataclasses import dataclass
from enum import Enum


class ProviderChoice(str, Enum):
    NEON = "neon"
    SUPABASE = "supabase"
    RAILWAY = "railway"
    RENDER = "render"
    VERCEL = "vercel"
    LOCAL = "local"
    MANUAL = "manual"
    LATER = "later"


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class EnvTarget:
    """Resolved environment file and the variable to write into it."""

    path: str
    variable_name: str
