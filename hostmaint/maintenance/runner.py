"""Run one external command and react to its exit status.

Child processes inherit the terminal, so their output streams live and only
the exit status comes back. A non-zero status goes to the continuation gate;
declining there raises ``RunAborted``, which the CLI turns into the process
exit code.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass

from .. import console
from .gate import Confirm, ask_continue, terminal_confirm

# Keeps apt, needrestart and apt-listchanges from stopping to ask questions.
NONINTERACTIVE_ENV = {
    "DEBIAN_FRONTEND": "noninteractive",
    "NEEDRESTART_MODE": "a",
    "APT_LISTCHANGES_FRONTEND": "none",
}

_NOT_FOUND = 127
_NOT_EXECUTABLE = 126


@dataclass(frozen=True)
class StepOutcome:
    description: str
    command: tuple[str, ...]
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class RunAborted(Exception):
    """The operator chose to stop after a failed step."""

    def __init__(self, outcome: StepOutcome):
        super().__init__(f"{outcome.description} failed with exit status {outcome.returncode}")
        self.outcome = outcome

    @property
    def exit_code(self) -> int:
        return self.outcome.returncode if self.outcome.returncode > 0 else 1


def _needs_sudo() -> bool:
    return os.geteuid() != 0 and shutil.which("sudo") is not None


def privileged(command: list[str]) -> list[str]:
    """Prefix *command* with sudo when not already root.

    sudo resets the environment, so the non-interactive variables are passed
    as ``VAR=value`` arguments the way ``sudo DEBIAN_FRONTEND=... apt-get``
    would be typed by hand.
    """
    if not _needs_sudo():
        return list(command)
    assignments = [f"{key}={value}" for key, value in NONINTERACTIVE_ENV.items()]
    return ["sudo", *assignments, *command]


class StepRunner:
    def __init__(self, confirm: Confirm = terminal_confirm):
        self.confirm = confirm

    def execute(self, description: str, *command: str, root: bool = False) -> StepOutcome:
        """Run *command* and return its outcome without consulting the gate."""
        argv = privileged(list(command)) if root else list(command)
        console.start(description)
        env = {**os.environ, **NONINTERACTIVE_ENV}
        try:
            returncode = subprocess.run(argv, env=env, check=False).returncode
        except FileNotFoundError:
            console.fail(f"{argv[0]}: command not found")
            returncode = _NOT_FOUND
        except PermissionError:
            console.fail(f"{argv[0]}: permission denied")
            returncode = _NOT_EXECUTABLE
        return StepOutcome(description=description, command=tuple(argv), returncode=returncode)

    def run(self, description: str, *command: str, root: bool = False) -> StepOutcome:
        """Run *command*; on failure ask the operator whether to go on.

        Raises:
            RunAborted: The command failed and the operator declined to continue.
        """
        outcome = self.execute(description, *command, root=root)
        if outcome.ok:
            console.ok(description)
            return outcome

        console.fail(f"{description} failed (exit status {outcome.returncode})")
        if not ask_continue(self.confirm):
            raise RunAborted(outcome)
        console.warn("Continuing after failure")
        return outcome
