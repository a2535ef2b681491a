from typing import Callable, Optional

from rich.console import Console

Confirm = Callable[[str], bool]


def confirm_prompt(message: str, console: Optional[Console] = None) -> bool:
    """Ask a yes/no question on the terminal; anything but y/yes is no."""
    console = console or Console()
    try:
        response = console.input(f"{message} (yes/no) :")
    except EOFError:
        return False
    return response.strip().lower() in ("y", "yes")


def fixed_answer(answer: bool) -> Confirm:
    """A confirm callable that never prompts."""

    def confirm(message: str) -> bool:
        return answer

    return confirm
