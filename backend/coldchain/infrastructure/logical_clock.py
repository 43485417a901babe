"""Logical Clock — monotonic integer timestamps for every mutating call.

Invariants:
    - now() never returns a value lower than any value it returned before
    - observe() never hands back a value lower than the clock's last value;
      a regressing caller-supplied timestamp is clamped up to it
    - stamp() runs under the registry write lock, so timestamps follow commit order

Design Decisions:
    - Wall-clock seconds as the base, bumped by one on ties or regressions,
      so timestamps stay readable while remaining strictly ordered
    - Clamp instead of reject: a skewed client still gets its write recorded
"""

import time
from dataclasses import replace

from coldchain.core.domain_types import LogicalTimestamp
from coldchain.core.shipment_state import CallContext


class LogicalClock:
    """Process-wide source of logical timestamps."""

    def __init__(self, start: int = 0):
        self._last = start

    def now(self) -> LogicalTimestamp:
        self._last = max(self._last + 1, int(time.time()))
        return LogicalTimestamp(self._last)

    def observe(self, timestamp: int) -> LogicalTimestamp:
        """Accept a caller-supplied timestamp, clamped to the clock's last value."""
        self._last = max(self._last, timestamp)
        return LogicalTimestamp(self._last)

    def stamp(self, ctx: CallContext) -> CallContext:
        """Fix the call's timestamp: the requested one (clamped) or now()."""
        if ctx.timestamp is None:
            return replace(ctx, timestamp=self.now())
        return replace(ctx, timestamp=self.observe(ctx.timestamp))


clock = LogicalClock()
