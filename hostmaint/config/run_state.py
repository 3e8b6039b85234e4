"""Per-process run session.

The session is created once at process entry and handed to the summary
reporter at the end. Nothing is written to disk; each run starts fresh.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RunSession:
    hostname: str
    started_at: float = field(default_factory=time.time)

    def elapsed_seconds(self, now: float | None = None) -> int:
        """Whole seconds since the session started, never negative."""
        if now is None:
            now = time.time()
        return max(0, int(now - self.started_at))
