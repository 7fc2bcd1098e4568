"""Interactive setup contracts.

Question descriptors follow the {type, name, message} shape understood by
the setup driver's prompt capability.
"""

from collections.abc import Callable
from typing import Any, Literal, Protocol, TypedDict


class Question(TypedDict):
    """A single prompt for the operator."""

    type: Literal["number", "input", "confirm"]
    name: str
    message: str


Answers = dict[str, Any]
PromptFn = Callable[[list[Question]], Answers]


class Spinner(Protocol):
    """Progress indicator handed to plugins during setup."""

    def start(self) -> "Spinner":
        """Show the indicator. Returns self so calls can be chained."""
        ...

    def succeed(self, text: str | None = None) -> None:
        """Stop the indicator and mark the step as done."""
        ...
