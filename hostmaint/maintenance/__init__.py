"""Maintenance pipeline: step runner, continuation gate and the stages it drives."""

from .gate import ask_continue, is_affirmative, terminal_confirm
from .kernels import select_purge_candidates
from .planner import build_plan
from .reboot import RebootIssued, check_reboot
from .runner import RunAborted, StepOutcome, StepRunner
from .stage import Stage, run_stages

__all__ = [
    "RebootIssued",
    "RunAborted",
    "Stage",
    "StepOutcome",
    "StepRunner",
    "ask_continue",
    "build_plan",
    "check_reboot",
    "is_affirmative",
    "run_stages",
    "select_purge_candidates",
    "terminal_confirm",
]
