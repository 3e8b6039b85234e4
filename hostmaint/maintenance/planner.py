"""The fixed maintenance pipeline.

Order: greeting, system update, housekeeping, completion notice, custom
cleanup, container maintenance, reboot check, summary. Optional stages carry
an ``applies`` predicate and are skipped entirely when it is false.
"""

from __future__ import annotations

from .. import console
from ..config.run_state import RunSession
from ..config.settings import Settings
from ..report.summary import report_summary
from .containers import maintain_containers
from .custom import custom_scripts, run_custom_cleanup
from .gate import Confirm, terminal_confirm
from .housekeeping import housekeeping_stages
from .reboot import REBOOTED, RebootIssued, check_reboot
from .runner import StepRunner
from .stage import Stage, run_stages


def greet(settings: Settings) -> None:
    console.line(f"Hello, {settings.user}. Let's update this system.")
    console.banner(settings.hostname)


def update_system(runner: StepRunner) -> None:
    runner.run("Refreshing the package index", "apt-get", "update", root=True)
    runner.run("Upgrading installed packages", "apt-get", "upgrade", "-y", root=True)
    runner.run("Applying the full upgrade", "apt-get", "dist-upgrade", "-y", root=True)


def housekeeping(runner: StepRunner, settings: Settings) -> None:
    run_stages(housekeeping_stages(runner, settings))


def update_complete() -> None:
    console.line("--------------------")
    console.line("- Update Complete! -")
    console.line("--------------------")


def reboot_check(runner: StepRunner, settings: Settings, confirm: Confirm) -> None:
    if check_reboot(runner, settings, confirm=confirm) == REBOOTED:
        raise RebootIssued()


def build_plan(
    runner: StepRunner,
    settings: Settings,
    session: RunSession,
    confirm: Confirm = terminal_confirm,
) -> list[Stage]:
    """Return the ordered stages for one run."""
    return [
        Stage("greeting", "Greeting", lambda: greet(settings)),
        Stage("update", "System update", lambda: update_system(runner)),
        Stage("housekeeping", "Housekeeping", lambda: housekeeping(runner, settings)),
        Stage("complete", "Update complete", update_complete),
        Stage(
            "custom_cleanup",
            "Custom cleanup",
            lambda: run_custom_cleanup(runner, settings.home),
            applies=lambda: bool(custom_scripts(settings.home)),
            skip_reason="no executable ~/bin/cleanup.sh or ~/bin/clean.sh",
        ),
        Stage(
            "containers",
            "Container maintenance",
            lambda: maintain_containers(runner, settings),
            applies=lambda: settings.containers_enabled,
            skip_reason="disabled, set HOSTMAINT_CONTAINERS=1 to enable",
        ),
        Stage("reboot", "Reboot check", lambda: reboot_check(runner, settings, confirm)),
        Stage("summary", "Summary", lambda: report_summary(session)),
    ]
