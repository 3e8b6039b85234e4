"""Tests for the end-of-run summary.

Run with:  python -m pytest tests/  or  python -m unittest discover tests/
"""

import unittest
import unittest.mock as mock

from hostmaint.collectors.base import BaseCollector
from hostmaint.collectors.memory import MemoryCollector
from hostmaint.collectors.uptime import format_uptime
from hostmaint.config.run_state import RunSession
from hostmaint.report.summary import build_summary, format_elapsed, render_summary


class _Broken(BaseCollector):
    name = "broken"

    def _collect(self) -> dict:
        raise RuntimeError("no /proc")


class _Fixed(BaseCollector):
    name = "fixed"

    def __init__(self, data):
        self.data = data

    def _collect(self) -> dict:
        return self.data


class TestElapsed(unittest.TestCase):

    def test_125_seconds(self):
        self.assertEqual(format_elapsed(125), "2 min 5 sec")

    def test_zero_and_negative(self):
        self.assertEqual(format_elapsed(0), "0 min 0 sec")
        self.assertEqual(format_elapsed(-4), "0 min 0 sec")

    def test_session_elapsed(self):
        session = RunSession(hostname="box", started_at=1000.0)
        self.assertEqual(session.elapsed_seconds(1125.7), 125)


class TestBuildSummary(unittest.TestCase):

    def test_elapsed_from_session(self):
        session = RunSession(hostname="box", started_at=1_700_000_000.0)
        summary = build_summary(session, now=1_700_000_125.0, collectors=[])
        self.assertEqual(summary.elapsed_seconds, 125)
        self.assertEqual(summary.elapsed_human, "2 min 5 sec")
        self.assertEqual(summary.hostname, "box")
        self.assertIsNone(summary.memory)

    def test_collector_failure_is_recorded(self):
        session = RunSession(hostname="box", started_at=0.0)
        summary = build_summary(session, now=10.0, collectors=[("memory", _Broken())])
        self.assertIsNone(summary.memory)
        self.assertEqual(summary.errors, ["broken: no /proc"])

    def test_sections_are_typed(self):
        session = RunSession(hostname="box", started_at=0.0)
        collectors = [
            ("uptime", _Fixed({"last_boot": "x", "total_seconds": 90061, "human_readable": format_uptime(90061)})),
            ("network", _Fixed({"default_interface": "eth0",
                                "interfaces": [{"name": "eth0", "ip_addresses": ["10.0.0.2"]}]})),
        ]
        summary = build_summary(session, now=5.0, collectors=collectors)
        self.assertEqual(summary.uptime.human_readable, "1d 1h 1m 1s")
        self.assertEqual(summary.network.interfaces[0].ip_addresses, ["10.0.0.2"])
        render_summary(summary)


class TestMemoryCollector(unittest.TestCase):

    def test_megabytes(self):
        vm = mock.Mock(total=8 * 1024 ** 3, used=2 * 1024 ** 3, available=6 * 1024 ** 3, percent=25.0)
        sm = mock.Mock(total=1024 ** 3, used=0)
        with mock.patch("hostmaint.collectors.memory.psutil.virtual_memory", return_value=vm), \
             mock.patch("hostmaint.collectors.memory.psutil.swap_memory", return_value=sm):
            result = MemoryCollector().collect()
        self.assertEqual(result.data["total_mb"], 8192)
        self.assertEqual(result.data["used_mb"], 2048)
        self.assertEqual(result.data["swap_total_mb"], 1024)


if __name__ == "__main__":
    unittest.main()
