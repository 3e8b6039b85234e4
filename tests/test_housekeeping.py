"""Tests for the housekeeping stages and the stage loop.

Run with:  python -m pytest tests/  or  python -m unittest discover tests/
"""

import subprocess
import tempfile
import unittest
import unittest.mock as mock
from pathlib import Path

from hostmaint.config.settings import load_settings
from hostmaint.maintenance.housekeeping import housekeeping_stages
from hostmaint.maintenance.runner import StepRunner
from hostmaint.maintenance.stage import Stage, run_stages

PATCH_WHICH = "hostmaint.maintenance.housekeeping.shutil.which"
PATCH_RUN = "hostmaint.maintenance.runner.subprocess.run"
PATCH_SUDO = "hostmaint.maintenance.runner._needs_sudo"


def _settings(home):
    return load_settings({"HOME": str(home), "USER": "op", "HOSTNAME": "box"})


class TestStageLoop(unittest.TestCase):

    def test_false_predicate_never_runs_action(self):
        action = mock.Mock()
        ran = run_stages([Stage("x", "X", action, applies=lambda: False)])
        action.assert_not_called()
        self.assertEqual(ran, [])

    def test_runs_in_order(self):
        calls = []
        stages = [
            Stage("a", "A", lambda: calls.append("a")),
            Stage("b", "B", lambda: calls.append("b"), applies=lambda: True),
        ]
        self.assertEqual(run_stages(stages, heading=True), ["a", "b"])
        self.assertEqual(calls, ["a", "b"])


class TestHousekeeping(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_no_tools_means_no_commands_and_no_prompt(self):
        confirm = mock.Mock(return_value=False)
        runner = StepRunner(confirm)
        with mock.patch(PATCH_WHICH, return_value=None), \
             mock.patch(PATCH_RUN) as fake_run:
            ran = run_stages(housekeeping_stages(runner, _settings(self.home)))
        self.assertEqual(ran, [])
        fake_run.assert_not_called()
        confirm.assert_not_called()

    def test_only_present_tools_run(self):
        confirm = mock.Mock(return_value=False)
        runner = StepRunner(confirm)

        def which(name):
            return "/usr/bin/apt-get" if name == "apt-get" else None

        with mock.patch(PATCH_WHICH, side_effect=which), \
             mock.patch(PATCH_SUDO, return_value=False), \
             mock.patch(PATCH_RUN, return_value=subprocess.CompletedProcess([], 0)) as fake_run:
            ran = run_stages(housekeeping_stages(runner, _settings(self.home)))

        self.assertEqual(ran, ["autoremove", "autoclean", "clean"])
        commands = [c[0][0] for c in fake_run.call_args_list]
        self.assertEqual(commands[0], ["apt-get", "autoremove", "--purge", "-y"])
        self.assertEqual(commands[2], ["apt-get", "clean"])
        confirm.assert_not_called()

    def test_missing_thumbnail_cache_is_skipped(self):
        stages = {s.name: s for s in housekeeping_stages(StepRunner(), _settings(self.home))}
        with mock.patch(PATCH_WHICH, return_value="/usr/bin/find"):
            self.assertFalse(stages["thumbnails"].applicable())
            (self.home / ".cache" / "thumbnails").mkdir(parents=True)
            self.assertTrue(stages["thumbnails"].applicable())

    def test_thumbnail_cache_cleared_without_sudo(self):
        thumbs = self.home / ".cache" / "thumbnails"
        thumbs.mkdir(parents=True)
        stages = {s.name: s for s in housekeeping_stages(StepRunner(), _settings(self.home))}
        with mock.patch(PATCH_SUDO, return_value=True), \
             mock.patch(PATCH_RUN, return_value=subprocess.CompletedProcess([], 0)) as fake_run:
            stages["thumbnails"].action()
        self.assertEqual(fake_run.call_args[0][0], ["find", str(thumbs), "-mindepth", "1", "-delete"])

    def test_journal_retention_from_settings(self):
        settings = load_settings({
            "HOME": str(self.home), "USER": "op", "HOSTNAME": "box",
            "HOSTMAINT_JOURNAL_RETENTION": "14d",
        })
        stages = {s.name: s for s in housekeeping_stages(StepRunner(), settings)}
        with mock.patch(PATCH_SUDO, return_value=False), \
             mock.patch(PATCH_RUN, return_value=subprocess.CompletedProcess([], 0)) as fake_run:
            stages["journal"].action()
        self.assertEqual(fake_run.call_args[0][0], ["journalctl", "--vacuum-time=14d"])


if __name__ == "__main__":
    unittest.main()
