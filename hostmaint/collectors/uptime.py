"""Collect system boot and uptime information via psutil."""

import datetime

import psutil

from .base import BaseCollector


def format_uptime(total_seconds: int) -> str:
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{days}d {hours}h {minutes}m {seconds}s"


class UptimeCollector(BaseCollector):
    name = "uptime"

    def _collect(self) -> dict:
        boot_dt = datetime.datetime.fromtimestamp(psutil.boot_time()).astimezone()
        now_dt = datetime.datetime.now().astimezone()
        total_seconds = max(0, int((now_dt - boot_dt).total_seconds()))

        return {
            "last_boot": boot_dt.isoformat(timespec="seconds"),
            "total_seconds": total_seconds,
            "human_readable": format_uptime(total_seconds),
        }
