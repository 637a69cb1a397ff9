"""
Round-robin driver.

Once per interval the driver advances its scenario index by one (modulo the
number of scenarios) and runs that scenario to completion before waiting for
the next tick. The index is the only state carried between ticks.
"""

import time
from typing import Callable, Optional, Sequence

from logs_demo.generators.randomizers import FieldRandomizer
from logs_demo.generators.scenarios import SCENARIOS, Scenario
from logs_demo.sinks import LogSink
from logs_demo.utils.logging_utils import logger, log_execution_time


class ScenarioDriver:
    """Fires one scenario per tick, cycling through a fixed ordered list."""

    def __init__(
        self,
        sink: LogSink,
        randomizer: Optional[FieldRandomizer] = None,
        scenarios: Sequence[Scenario] = SCENARIOS,
        interval_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ):
        if not scenarios:
            raise ValueError("At least one scenario is required")
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.sink = sink
        self.randomizer = randomizer or FieldRandomizer()
        self.scenarios = tuple(scenarios)
        self.interval_seconds = interval_seconds
        self.index = 0
        self.ticks = 0
        self._clock = clock
        self._sleep = sleep

    @property
    def current(self) -> Scenario:
        return self.scenarios[self.index]

    @log_execution_time
    def tick(self) -> Scenario:
        """
        Advance to the next scenario and run it.

        Returns:
            The scenario that was run
        """
        self.index = (self.index + 1) % len(self.scenarios)
        scenario = self.current
        scenario(self.sink, self.randomizer)
        self.ticks += 1
        return scenario

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick every ``interval_seconds`` until ``max_ticks`` ticks have run.

        The first tick fires one full interval after start. Deadlines are
        absolute, so time spent generating does not push later ticks back;
        ticks missed while behind are dropped rather than fired in a burst.

        Args:
            max_ticks: Stop after this many ticks; None runs until the process exits

        Returns:
            Number of ticks run
        """
        logger.debug(
            f"Driver running {len(self.scenarios)} scenarios every {self.interval_seconds}s"
        )
        ran = 0
        next_tick = self._clock() + self.interval_seconds

        while max_ticks is None or ran < max_ticks:
            delay = next_tick - self._clock()
            if delay > 0:
                self._sleep(delay)

            self.tick()
            ran += 1

            next_tick += self.interval_seconds
            now = self._clock()
            if next_tick <= now:
                missed = int((now - next_tick) // self.interval_seconds) + 1
                logger.debug(f"Driver fell behind, dropping {missed} tick(s)")
                next_tick += missed * self.interval_seconds

        return ran
