"""Environment file (.env) updates with backup."""

import logging
import os
import re
import shutil

from rich.console import Console

from dbsetup.constants import (
    BACKUP_SUFFIX,
    DEFAULT_ENV_FILE,
    ENV_EXAMPLE_FILE,
    ENV_SECTION_COMMENT,
)
from dbsetup.errors import SetupError
from dbsetup.errors_catalog import actionable_error

_MASK_PATTERN = re.compile(r"(://)([^:/@\s]+):([^@\s]+)@")


def mask_url(value: str) -> str:
    """Hide the password of every ``user:password@`` URL segment in ``value``."""
    return _MASK_PATTERN.sub(r"\1\2:***@", value)


def _variable_pattern(key: str) -> "re.Pattern[str]":
    return re.compile(rf"^{re.escape(key)}=[^\r\n]*", flags=re.MULTILINE)


class EnvFileService:
    """Reads, backs up and upserts KEY=VALUE lines in a text file."""

    def __init__(self, logger: logging.Logger, console: Console):
        self.logger = logger
        self.console = console

    def initialize_from_example(self, cwd: str) -> bool:
        example_path = os.path.join(cwd, ENV_EXAMPLE_FILE)
        env_path = os.path.join(cwd, DEFAULT_ENV_FILE)
        if not os.path.exists(example_path) or os.path.exists(env_path):
            return False

        try:
            shutil.copyfile(example_path, env_path)
        except OSError as exc:
            self.logger.warning("Could not copy %s to %s: %s", example_path, env_path, exc)
            self.console.print(
                f"[yellow]Warning:[/yellow] Could not copy {ENV_EXAMPLE_FILE} to {DEFAULT_ENV_FILE}"
            )
            return False

        self.console.print(f"[green]Created {DEFAULT_ENV_FILE} file from {ENV_EXAMPLE_FILE}[/green]")
        return True

    def resolve_path(self, path: str, cwd: str) -> str:
        resolved = os.path.abspath(os.path.join(cwd, path))
        directory = os.path.dirname(resolved)
        if not os.path.isdir(directory):
            raise SetupError(actionable_error("directory_missing", path=directory))
        return resolved

    def read(self, path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as file_obj:
                return file_obj.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise SetupError(f"Could not read {path}: {exc}") from exc

    def has_variable(self, path: str, key: str) -> bool:
        if not os.path.exists(path):
            return False
        return _variable_pattern(key).search(self.read(path)) is not None

    def backup(self, path: str) -> str:
        backup_path = f"{path}{BACKUP_SUFFIX}"
        try:
            shutil.copyfile(path, backup_path)
        except OSError as exc:
            raise SetupError(f"Could not create backup {backup_path}: {exc}") from exc

        self.logger.debug("Backup created: %s", backup_path)
        self.console.print(f"[dim]Backup created: {backup_path}[/dim]")
        return backup_path

    def upsert(self, path: str, key: str, value: str) -> bool:
        """Write ``key=value`` into ``path``. Returns True when an existing line was replaced."""
        content = ""
        if os.path.exists(path):
            content = self.read(path)
            self.backup(path)

        pattern = _variable_pattern(key)
        line = f"{key}={value}"

        if pattern.search(content):
            content = pattern.sub(lambda _match: line, content, count=1)
            replaced = True
        else:
            if content and not content.endswith("\n"):
                content += "\n"
            content += f"\n{ENV_SECTION_COMMENT}\n{line}\n"
            replaced = False

        try:
            with open(path, "w", encoding="utf-8", newline="") as file_obj:
                file_obj.write(content)
        except OSError as exc:
            raise SetupError(f"Failed to write to {path}: {exc}") from exc

        action = "Updated" if replaced else "Added"
        preposition = "in" if replaced else "to"
        self.logger.info("%s %s %s %s", action, key, preposition, path)
        self.console.print(f"[green]{action} {key} {preposition} {path}[/green]")
        return replaced
