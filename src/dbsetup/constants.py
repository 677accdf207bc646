"""Static choices and defaults for dbsetup."""

from dbsetup.models import ProviderChoice

PROVIDER_CHOICES = [
    (ProviderChoice.NEON, "Neon (Serverless PostgreSQL)"),
    (ProviderChoice.SUPABASE, "Supabase (Open Source Firebase Alternative)"),
    (ProviderChoice.RAILWAY, "Railway (Platform as a Service)"),
    (ProviderChoice.RENDER, "Render (Cloud Hosting Platform)"),
    (ProviderChoice.VERCEL, "Vercel Postgres (Serverless PostgreSQL)"),
    (ProviderChoice.LOCAL, "Local PostgreSQL (Docker)"),
    (ProviderChoice.MANUAL, "I already have a DATABASE_URL"),
    (ProviderChoice.LATER, "I'll configure later"),
]

CUSTOM_CHOICE = "custom"

ENV_PATH_CHOICES = [
    (".env", ".env (Root directory)"),
    (".env.local", ".env.local (Local environment)"),
    (".env.development", ".env.development (Development)"),
    (".env.production", ".env.production (Production)"),
    ("config/.env", "config/.env (Config directory)"),
    ("apps/backend/.env", "apps/backend/.env (Monorepo backend)"),
    (CUSTOM_CHOICE, "Custom path..."),
]

VARIABLE_NAME_CHOICES = [
    ("DATABASE_URL", "DATABASE_URL (Standard)"),
    ("POSTGRES_URL", "POSTGRES_URL (Alternative)"),
    ("DB_URL", "DB_URL (Short form)"),
    ("DB_CONNECTION_STRING", "DB_CONNECTION_STRING (Descriptive)"),
    ("DIRECT_URL", "DIRECT_URL (Prisma direct)"),
    ("DATABASE_CONNECTION", "DATABASE_CONNECTION (Verbose)"),
    (CUSTOM_CHOICE, "Custom variable name..."),
]

ENV_EXAMPLE_FILE = ".env.example"
DEFAULT_ENV_FILE = ".env"
BACKUP_SUFFIX = ".backup"
ENV_SECTION_COMMENT = "# Database Configuration"

DEFAULT_CONFIG_FILE = ".dbsetup.yml"

RESOURCE_NAME_MAX_LENGTH = 64
PASSWORD_LENGTH = 24
