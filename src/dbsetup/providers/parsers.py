"""Parsers for provider CLI output.

Every parser either returns the value it was asked for or raises
``OutputParseError`` carrying the raw output, so adapters never deal with
half-parsed data.
"""

import json
import re
from typing import Any, Dict, List, Optional, Tuple

from dbsetup.errors import OutputParseError
from dbsetup.services.validation import is_connection_string

_JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def load_json_list(output: str, wrapper_key: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read a JSON list of objects, tolerating banner text around it.

    Some CLIs wrap the list in an object (``{"projects": [...]}``); pass the
    key as ``wrapper_key`` to unwrap it.
    """
    text = output.strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_ARRAY_PATTERN.search(text)
        if not match:
            raise OutputParseError("Could not find a JSON array in the output.", raw_output=output)
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise OutputParseError(f"Invalid JSON in output: {exc}", raw_output=output) from exc

    if isinstance(data, dict) and wrapper_key and isinstance(data.get(wrapper_key), list):
        data = data[wrapper_key]

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise OutputParseError("Expected a JSON list of objects.", raw_output=output)
    return data


def parse_neon_project(output: str, project_name: str) -> Tuple[str, str]:
    """Return ``(project_id, region_id)`` of the named project."""
    projects = load_json_list(output, wrapper_key="projects")
    for project in projects:
        if project.get("name") == project_name and project.get("id"):
            return project["id"], project.get("region_id", "")

    available = ", ".join(str(project.get("name")) for project in projects) or "<none>"
    raise OutputParseError(
        f"Could not find project '{project_name}' in the list. Available projects: {available}",
        raw_output=output,
    )


def parse_neon_default_branch(output: str) -> str:
    branches = load_json_list(output, wrapper_key="branches")
    for branch in branches:
        if branch.get("default") is True and branch.get("id"):
            return branch["id"]
    for branch in branches:
        if branch.get("name") == "main" and branch.get("id"):
            return branch["id"]
    raise OutputParseError("Could not find main branch.", raw_output=output)


def parse_neon_connection_string(output: str) -> str:
    text = output.strip()
    if is_connection_string(text):
        return text

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OutputParseError("Unable to extract connection string.", raw_output=output) from exc

    if isinstance(parsed, dict):
        if parsed.get("connection_uri"):
            return parsed["connection_uri"]
        uris = parsed.get("connection_uris") or []
        if uris and isinstance(uris[0], dict) and uris[0].get("connection_uri"):
            return uris[0]["connection_uri"]

    raise OutputParseError("Unable to extract connection string.", raw_output=output)


def count_supabase_orgs(output: str) -> int:
    """Count data rows of the ``supabase orgs list`` table."""
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    separator_index = -1
    for index, line in enumerate(lines):
        if "|" in line and "-" in line:
            separator_index = index
            break
    return max(0, len(lines) - (separator_index + 1))


def parse_supabase_project(output: str, project_name: str) -> Tuple[str, str]:
    """Return ``(project_ref, region)`` of the named project."""
    for project in load_json_list(output):
        if project.get("name") != project_name:
            continue
        project_ref = project.get("id") or project.get("ref")
        if project_ref:
            return project_ref, project.get("region", "")
    raise OutputParseError("Failed to find new Supabase project.", raw_output=output)


def parse_kv_lines(output: str) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines; values keep everything after the first ``=``."""
    values: Dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if sep and key.strip():
            values[key.strip()] = value.strip()
    return values


def parse_dotenv_value(content: str, key: str) -> Optional[str]:
    match = re.search(rf'^{re.escape(key)}="?([^"\n]+)"?', content, flags=re.MULTILINE)
    if not match:
        return None
    return match.group(1).strip()


def find_render_service(output: str, name: str) -> Optional[Dict[str, Any]]:
    """Find a service by name in ``render services list --output json``.

    Entries are either the service itself or wrapped under a type key such as
    ``{"postgres": {...}}``.
    """
    for entry in load_json_list(output):
        candidates = [entry] + [value for value in entry.values() if isinstance(value, dict)]
        for candidate in candidates:
            if candidate.get("name") == name:
                return candidate
    return None


def render_service_status(service: Dict[str, Any]) -> str:
    return str(service.get("status") or "").lower()


def render_connection_string(service: Dict[str, Any]) -> Optional[str]:
    connection_info = service.get("connectionInfo")
    sources = [service]
    if isinstance(connection_info, dict):
        sources.insert(0, connection_info)

    for source in sources:
        for key in ("externalConnectionString", "external_connection_string"):
            value = source.get(key)
            if isinstance(value, str) and is_connection_string(value):
                return value
    return None
