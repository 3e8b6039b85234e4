"""Tests for the reboot check.

Run with:  python -m pytest tests/  or  python -m unittest discover tests/
"""

import subprocess
import tempfile
import unittest
import unittest.mock as mock
from pathlib import Path

from hostmaint.config.settings import load_settings
from hostmaint.maintenance.reboot import REBOOT_PROMPT, check_reboot, pending_packages
from hostmaint.maintenance.runner import StepRunner


class TestCheckReboot(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.marker = self.dir / "reboot-required"
        self.pkgs = self.dir / "reboot-required.pkgs"
        self.settings = load_settings({"HOME": str(self.dir), "USER": "op", "HOSTNAME": "box"})
        self.runner = mock.Mock(spec=StepRunner)
        self.sleep = mock.Mock()

    def tearDown(self):
        self._tmp.cleanup()

    def _check(self, confirm):
        return check_reboot(
            self.runner, self.settings, confirm=confirm,
            marker=self.marker, packages=self.pkgs, sleep=self.sleep,
        )

    def test_no_marker_never_prompts(self):
        confirm = mock.Mock(return_value=True)
        self.assertEqual(self._check(confirm), "skipped")
        confirm.assert_not_called()
        self.runner.run.assert_not_called()

    def test_declined(self):
        self.marker.touch()
        confirm = mock.Mock(return_value=False)
        self.assertEqual(self._check(confirm), "skipped")
        confirm.assert_called_once_with(REBOOT_PROMPT)
        self.runner.run.assert_not_called()

    def test_confirmed_reboots_after_delay(self):
        self.marker.touch()
        self.assertEqual(self._check(lambda prompt: True), "rebooted")
        self.sleep.assert_called_once_with(2)
        self.runner.run.assert_called_once_with("Rebooting", "reboot", root=True)

    def test_failed_reboot_continued_is_skipped(self):
        self.marker.touch()
        runner = StepRunner(lambda prompt: True)
        with mock.patch("hostmaint.maintenance.runner._needs_sudo", return_value=False), \
             mock.patch("hostmaint.maintenance.runner.subprocess.run",
                        return_value=subprocess.CompletedProcess([], 1)) as fake_run:
            result = check_reboot(
                runner, self.settings, confirm=lambda prompt: True,
                marker=self.marker, packages=self.pkgs, sleep=self.sleep,
            )
        self.assertEqual(result, "skipped")
        self.assertEqual(fake_run.call_args[0][0], ["reboot"])

    def test_pending_packages_deduplicated(self):
        self.pkgs.write_text("linux-base\nlibc6\nlinux-base\n\n", encoding="utf-8")
        self.assertEqual(pending_packages(self.pkgs), ["linux-base", "libc6"])

    def test_missing_package_list(self):
        self.assertEqual(pending_packages(self.pkgs), [])


if __name__ == "__main__":
    unittest.main()
