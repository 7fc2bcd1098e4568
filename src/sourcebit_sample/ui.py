# src/sourcebit_sample/ui.py
"""
Terminal setup driver built on rich.

Provides the two capabilities a plugin's setup flow may use:
- prompt_questions(): asks {type, name, message} questions
- RichSpinner: progress indicator with start()/succeed()

Usage:
    from sourcebit_sample.ui import make_setup_context

    ctx = make_setup_context()
    answers = ctx.prompt([{"type": "number", "name": "n", "message": "How many?"}])
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.status import Status

from sourcebit_sample.contracts import Answers, Question
from sourcebit_sample.plugins.context import SetupContext


class RichSpinner:
    """Spinner shown while a setup step does background work."""

    def __init__(self, text: str, console: Console) -> None:
        self.text = text
        self._console = console
        self._status: Status | None = None

    def start(self) -> RichSpinner:
        self._status = self._console.status(f"[bold blue]{self.text}", spinner="dots")
        self._status.start()
        return self

    def succeed(self, text: str | None = None) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        self._console.print(f"[green]✓[/green] {text or self.text}")


def prompt_questions(questions: list[Question], console: Console) -> Answers:
    """Ask each question in order and collect the answers by name.

    Raises:
        ValueError: For an unsupported question type
    """
    answers: dict[str, Any] = {}
    for question in questions:
        kind = question["type"]
        message = question["message"]
        if kind == "number":
            answers[question["name"]] = IntPrompt.ask(message, console=console)
        elif kind == "confirm":
            answers[question["name"]] = Confirm.ask(message, console=console)
        elif kind == "input":
            answers[question["name"]] = Prompt.ask(message, console=console)
        else:
            raise ValueError(f"Unsupported question type: {kind!r}")
    return answers


def make_setup_context(console: Console | None = None) -> SetupContext:
    """Build a SetupContext wired to the terminal."""
    con = console or Console()
    return SetupContext(
        prompt=lambda questions: prompt_questions(questions, con),
        spinner=lambda text: RichSpinner(text, con),
    )
