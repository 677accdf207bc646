"""Actionable error catalog for dbsetup."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "cli_missing": {
        "what": "{provider} CLI is not available.",
        "next": "Install it with `{install_hint}` or create the database from the dashboard.",
    },
    "auth_failed": {
        "what": "Authentication with {provider} failed.",
        "next": "Run `{login_hint}` manually, or paste a connection string from the dashboard.",
    },
    "creation_failed": {
        "what": "Failed to create the {provider} {resource}.",
        "next": "Check quota limits and name collisions in {dashboard_url}, then retry.",
    },
    "parse_failed": {
        "what": "Could not read {what} from the {provider} CLI output.",
        "next": "Re-run with `--verbose` to inspect the raw output.",
    },
    "poll_timeout": {
        "what": "{provider} did not report {what} after {attempts} attempts.",
        "next": "Check the status in {dashboard_url}.",
    },
    "docker_missing": {
        "what": "Docker is not installed or not running.",
        "next": "Install Docker Desktop: https://www.docker.com/products/docker-desktop",
    },
    "directory_missing": {
        "what": "Directory does not exist: {path}.",
        "next": "Please create it first.",
    },
    "invalid_connection_string": {
        "what": "Invalid PostgreSQL connection string format.",
        "next": "Use a URL starting with postgres:// or postgresql://.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
