"""
Reapplication Countdown Timer

State machine:

    IDLE --start(uv, type)--> RUNNING --tick...0--> EXPIRED
    any  --restart----------> IDLE -> RUNNING (values recomputed)

- start() declines with NO_TIMER_NEEDED when UV index <= 1
- expiry fires the notifier exactly once
- the one-second tick loop is an asyncio task that cancel() stops;
  restart() reschedules it when one was running
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, Field

from .intervals import (
    REAPPLICATION_TIME_TABLE,
    ReapplicationTable,
    recommended_interval_minutes,
    timer_needed,
)
from .notifications import REAPPLY_BODY, REAPPLY_TITLE, LoggingNotifier, Notifier
from .uv_client import UVReading

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0

# Async source of a fresh UV reading (e.g. resolve_uv_index bound to a provider)
UVResolver = Callable[[], Awaitable[UVReading]]


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


class StartOutcome(str, Enum):
    STARTED = "started"
    NO_TIMER_NEEDED = "no_timer_needed"
    UV_UNKNOWN = "uv_unknown"
    NOT_IDLE = "not_idle"


class TimerSnapshot(BaseModel):
    state: TimerState
    seconds_remaining: Optional[int] = Field(default=None, ge=0)
    is_active: bool
    interval_minutes: Optional[int] = None
    uv_index: Optional[float] = None
    display: Optional[str] = None


def format_time(seconds: int) -> str:
    """Seconds -> "M:SS"."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class ReapplicationTimer:
    """
    Countdown for one session.

    start/tick/restart are synchronous so the transitions can be driven
    directly; schedule() runs the real one-second loop.
    """

    def __init__(
        self,
        fitzpatrick_type: int,
        notifier: Optional[Notifier] = None,
        table: ReapplicationTable = REAPPLICATION_TIME_TABLE,
        uv_resolver: Optional[UVResolver] = None,
    ):
        self.fitzpatrick_type = fitzpatrick_type
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.table = table
        self.uv_resolver = uv_resolver
        self.uv_index: Optional[float] = None
        self.interval_minutes: Optional[int] = None
        self.seconds_remaining: Optional[int] = None
        self.state = TimerState.IDLE
        self._task: Optional[asyncio.Task] = None
        self._tick_seconds = TICK_SECONDS

    @property
    def is_active(self) -> bool:
        return self.state == TimerState.RUNNING

    def start(self, uv_index: Optional[float] = None) -> StartOutcome:
        """
        IDLE -> RUNNING with seconds = interval minutes * 60.

        Uses the last known UV index when none is given. Only valid from
        IDLE; use restart() otherwise.
        """
        if self.state != TimerState.IDLE:
            return StartOutcome.NOT_IDLE
        if uv_index is not None:
            self.uv_index = uv_index
        if self.uv_index is None:
            return StartOutcome.UV_UNKNOWN
        if not timer_needed(self.uv_index):
            logger.info(f"UV index {self.uv_index} too low, no timer needed")
            return StartOutcome.NO_TIMER_NEEDED

        self.interval_minutes = recommended_interval_minutes(
            self.uv_index, self.fitzpatrick_type, self.table
        )
        self.seconds_remaining = self.interval_minutes * 60
        self.state = TimerState.RUNNING
        logger.info(
            f"Reapplication timer started: {self.interval_minutes} min "
            f"(UV {self.uv_index}, type {self.fitzpatrick_type})"
        )
        return StartOutcome.STARTED

    def tick(self) -> None:
        """One second elapsed. Expires (and notifies once) on reaching 0."""
        if self.state != TimerState.RUNNING or self.seconds_remaining is None:
            return
        self.seconds_remaining = max(self.seconds_remaining - 1, 0)
        if self.seconds_remaining == 0:
            self._expire()

    def _expire(self) -> None:
        self.state = TimerState.EXPIRED
        logger.info("Reapplication timer expired")
        self.notifier.notify(REAPPLY_TITLE, REAPPLY_BODY)

    def reset(self) -> None:
        """Back to IDLE; stops any scheduled loop."""
        self.cancel()
        self.state = TimerState.IDLE
        self.seconds_remaining = None
        self.interval_minutes = None

    def _scheduled_tick_seconds(self) -> Optional[float]:
        # A loop that ran to expiry still counts as scheduled
        if self._task is None:
            return None
        return self._tick_seconds

    def _resume(self, outcome: StartOutcome, tick_seconds: Optional[float]) -> StartOutcome:
        # A restarted countdown keeps ticking if the previous one was scheduled
        if outcome == StartOutcome.STARTED and tick_seconds is not None:
            self.schedule(tick_seconds)
        return outcome

    def restart(self, uv_index: Optional[float] = None) -> StartOutcome:
        """
        Reset, then start again with freshly computed values.

        Must be called on the event loop when a tick loop is scheduled.
        """
        tick_seconds = self._scheduled_tick_seconds()
        self.reset()
        return self._resume(self.start(uv_index), tick_seconds)

    async def restart_async(self) -> StartOutcome:
        """
        Restart, fetching the UV index first when it is not yet known.
        """
        tick_seconds = self._scheduled_tick_seconds()
        self.reset()
        if self.uv_index is None and self.uv_resolver is not None:
            reading = await self.uv_resolver()
            self.uv_index = reading.uv_index
        return self._resume(self.start(), tick_seconds)

    async def run(self, tick_seconds: float = TICK_SECONDS) -> None:
        """Tick every `tick_seconds` until the timer leaves RUNNING."""
        while self.state == TimerState.RUNNING:
            await asyncio.sleep(tick_seconds)
            self.tick()

    def schedule(self, tick_seconds: float = TICK_SECONDS) -> asyncio.Task:
        """Start the tick loop on the running event loop."""
        self.cancel()
        self._tick_seconds = tick_seconds
        self._task = asyncio.get_running_loop().create_task(self.run(tick_seconds))
        return self._task

    def cancel(self) -> None:
        """Stop the tick loop (teardown or restart). Countdown state is kept."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            state=self.state,
            seconds_remaining=self.seconds_remaining,
            is_active=self.is_active,
            interval_minutes=self.interval_minutes,
            uv_index=self.uv_index,
            display=format_time(self.seconds_remaining) if self.seconds_remaining is not None else None,
        )
