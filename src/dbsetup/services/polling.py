"""Bounded fixed-interval polling for asynchronous provisioning."""

import time
from typing import Callable


class PollingService:
    """Re-checks a readiness condition a limited number of times."""

    def __init__(self, logger, console):
        self.logger = logger
        self.console = console

    def wait_until(
        self,
        check_ready: Callable[[], bool],
        delay_seconds: float,
        max_attempts: int,
        description: str = "resource",
    ) -> bool:
        for attempt in range(1, max_attempts + 1):
            self.console.print(f"[dim]Attempt {attempt}/{max_attempts}...[/dim]")
            if check_ready():
                self.logger.debug("%s ready after %s attempt(s)", description, attempt)
                return True

            if attempt < max_attempts:
                self.console.print(
                    f"[yellow]{description} not ready. Retrying in {delay_seconds:g}s...[/yellow]"
                )
                time.sleep(delay_seconds)

        self.logger.warning("%s not ready after %s attempts", description, max_attempts)
        return False
