"""Stage definition and the sequential stage loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .. import console


@dataclass(frozen=True)
class Stage:
    name: str
    description: str
    action: Callable[[], object]
    applies: Optional[Callable[[], bool]] = None
    skip_reason: str = "not applicable on this host"

    def applicable(self) -> bool:
        return self.applies is None or bool(self.applies())


def run_stages(stages: Iterable[Stage], heading: bool = False) -> list[str]:
    """Run each applicable stage in order and return the names that ran.

    A stage whose predicate is false is skipped before its action is touched.
    Exceptions from an action (e.g. ``RunAborted``) stop the loop.
    """
    ran: list[str] = []
    for stage in stages:
        if not stage.applicable():
            console.skip(f"{stage.description}: skipped ({stage.skip_reason})")
            continue
        if heading:
            console.section(stage.description)
        stage.action()
        ran.append(stage.name)
    return ran
