"""Subprocess execution service for dbsetup."""

import subprocess
from typing import Iterable, List, Optional

from dbsetup.errors import SetupError
from dbsetup.models import CommandResult
from dbsetup.services.env_file import mask_url

COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Runs provider CLIs either captured or attached to the terminal."""

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(
        self,
        cmd: List[str],
        interactive: bool = False,
        check: bool = False,
        timeout: Optional[float] = None,
        redact: Iterable[str] = (),
    ) -> CommandResult:
        cmd_str = mask_url(" ".join(cmd))
        for secret in redact:
            if secret:
                cmd_str = cmd_str.replace(secret, "***")
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        try:
            completed = subprocess.run(
                cmd,
                text=True,
                capture_output=not interactive,
                timeout=effective_timeout,
            )
        except FileNotFoundError as exc:
            if check:
                raise SetupError(
                    f"Required command not found: {cmd[0]}. Please install it and try again."
                ) from exc
            self.logger.debug("Command not found: %s", cmd[0])
            return CommandResult(COMMAND_NOT_FOUND, "", f"{cmd[0]}: command not found")
        except subprocess.TimeoutExpired as exc:
            raise SetupError(f"Command timed out after {effective_timeout}s: {cmd_str}") from exc
        except OSError as exc:
            raise SetupError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        result = CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if result.stdout:
            self.logger.debug("Command output: %s", mask_url(result.stdout.strip()))

        if result.ok:
            return result

        message = f"Command failed ({result.returncode}): {cmd_str}"
        stderr = result.stderr.strip()
        if stderr:
            message = f"{message}\n{stderr}"

        if check:
            raise SetupError(message)

        self.logger.debug(message)
        return result
