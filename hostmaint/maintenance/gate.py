"""Continue-or-abort decision after a failed step.

Prompts go through a ``confirm(prompt) -> bool`` capability so callers and
tests can substitute their own. The default implementation reads one line
from standard input and treats any answer starting with "y" (case-insensitive)
as yes; everything else, including an empty line, end-of-input or Ctrl-C, is no.
"""

from __future__ import annotations

from typing import Callable, Optional

from .. import console

Confirm = Callable[[str], bool]

CONTINUE_PROMPT = "The last command exited with an error. Continue anyway? (yes/no) "


def is_affirmative(answer: Optional[str]) -> bool:
    if not answer:
        return False
    return answer.strip().lower().startswith("y")


def terminal_confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except (EOFError, KeyboardInterrupt):
        console.line()
        return False
    return is_affirmative(answer)


def ask_continue(confirm: Confirm = terminal_confirm) -> bool:
    """Return True to carry on with the next stage, False to abort the run."""
    return confirm(CONTINUE_PROMPT)
