"""Input validation helpers shared by the prompts and provider adapters.

Each ``validate_*`` function returns ``None`` when the value is acceptable,
or the message to show before asking again.
"""

import os
import re
from typing import Optional

from dbsetup.constants import RESOURCE_NAME_MAX_LENGTH

CONNECTION_STRING_PREFIXES = ("postgres://", "postgresql://")

_RESOURCE_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")
_RESOURCE_NAME_WITH_UNDERSCORE_PATTERN = re.compile(r"^[a-z0-9_-]+$")
_VARIABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_connection_string(value: str) -> bool:
    return value.startswith(CONNECTION_STRING_PREFIXES)


def validate_connection_string(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Connection string cannot be empty"
    if not is_connection_string(value):
        return (
            "Invalid PostgreSQL connection string. "
            "Should start with postgres:// or postgresql://"
        )
    return None


def validate_resource_name(
    value: str,
    label: str = "Project name",
    allow_underscore: bool = False,
) -> Optional[str]:
    if not value or not value.strip():
        return f"{label} cannot be empty"
    if len(value) > RESOURCE_NAME_MAX_LENGTH:
        return f"{label} must be {RESOURCE_NAME_MAX_LENGTH} characters or less"

    if allow_underscore:
        if not _RESOURCE_NAME_WITH_UNDERSCORE_PATTERN.fullmatch(value):
            return (
                f"{label} must contain only lowercase letters, numbers, hyphens, "
                "and underscores"
            )
    elif not _RESOURCE_NAME_PATTERN.fullmatch(value):
        return f"{label} must contain only lowercase letters, numbers, and hyphens"
    return None


def validate_variable_name(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Variable name cannot be empty"
    if not _VARIABLE_NAME_PATTERN.fullmatch(value):
        return "Variable name must contain only letters, numbers, and underscores"
    return None


def validate_env_path(value: str, cwd: str) -> Optional[str]:
    if not value or not value.strip():
        return "Path cannot be empty"

    directory = os.path.dirname(os.path.abspath(os.path.join(cwd, value)))
    if not os.path.isdir(directory):
        return f"Directory does not exist: {directory}. Please create it first."
    return None


def validate_org_name(value: str) -> Optional[str]:
    if not value or len(value.strip()) < 3:
        return "Organization name must be at least 3 characters"
    return None
