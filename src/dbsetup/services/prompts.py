"""Interactive terminal prompts built on rich."""

from typing import Any, Callable, Optional, Sequence, TextIO, Tuple

from rich.prompt import Confirm, Prompt

Validator = Callable[[str], Optional[str]]


class PromptService:
    """Asks the user for choices, free text and confirmations."""

    def __init__(self, console, stream: Optional[TextIO] = None):
        self.console = console
        self.stream = stream

    def select(
        self,
        message: str,
        choices: Sequence[Tuple[Any, str]],
        default: Any = None,
    ) -> Any:
        self.console.print(f"[cyan]{message}[/cyan]")
        default_index = None
        for index, (value, label) in enumerate(choices, start=1):
            self.console.print(f"  [bold]{index}[/bold]. {label}")
            if value == default:
                default_index = str(index)

        answer = Prompt.ask(
            "Enter a number",
            console=self.console,
            choices=[str(index) for index in range(1, len(choices) + 1)],
            default=default_index if default_index is not None else ...,
            show_choices=False,
            stream=self.stream,
        )
        return choices[int(answer) - 1][0]

    def text(
        self,
        message: str,
        default: Optional[str] = None,
        validate: Optional[Validator] = None,
    ) -> str:
        while True:
            answer = Prompt.ask(
                f"[cyan]{message}[/cyan]",
                console=self.console,
                default=default,
                stream=self.stream,
            )
            answer = (answer or "").strip()
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.console.print(f"[red]{error}[/red]")

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(
            message,
            console=self.console,
            default=default,
            stream=self.stream,
        )
