"""Command-line interface for hostmaint."""

import argparse
import sys
import time

from pydantic import ValidationError

from . import __version__, console
from .config.run_state import RunSession
from .config.settings import load_settings
from .maintenance import RebootIssued, RunAborted, StepRunner, build_plan, run_stages


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hostmaint",
        description="Update, clean up and reboot-check this Debian/Ubuntu host.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Settings come from the environment, e.g.\n"
            "  HOSTMAINT_CONTAINERS=1 hostmaint\n"
            "  HOSTMAINT_JOURNAL_RETENTION=14d hostmaint\n"
        ),
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"hostmaint {__version__}",
    )
    return parser.parse_args(argv)


def run(argv=None) -> None:
    """Main entry point - run the maintenance pipeline and exit."""
    started_at = time.time()
    parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as exc:
        console.fail(f"[hostmaint] Invalid HOSTMAINT_* setting:\n{exc}")
        sys.exit(2)

    session = RunSession(hostname=settings.hostname, started_at=started_at)
    runner = StepRunner()
    stages = build_plan(runner, settings, session, confirm=runner.confirm)

    try:
        run_stages(stages, heading=True)
    except RunAborted as exc:
        console.fail(f"[hostmaint] Aborted: {exc}")
        sys.exit(exc.exit_code)
    except RebootIssued:
        sys.exit(0)
    except KeyboardInterrupt:
        console.fail("[hostmaint] Interrupted")
        sys.exit(130)
