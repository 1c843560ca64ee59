"""
Acceleration timing over fixed speed windows (0-100 km/h and the like)
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from constants import DynoConstants


@dataclass
class MeasureResult:
    """Time taken to accelerate from ``start`` to ``end`` km/h"""
    start: float
    end: float
    measure_time: float  # seconds


class IntervalTimer:
    """
    Times every configured speed window on a stream of samples

    A window is armed whenever speed is at or below its start speed; the clock
    starts from the last such sample and stops at the first sample reaching
    the end speed.
    """

    def __init__(self, speed_config: Sequence[Tuple[float, float]] = DynoConstants.DEFAULT_SPEED_INTERVALS,
                 on_result: Optional[Callable[[MeasureResult], None]] = None):
        self.speed_config = [tuple(window) for window in speed_config]
        self.on_result = on_result
        self.results: List[MeasureResult] = []
        self._armed_at: Dict[int, float] = {}

    def add_record(self, speed: float, time: float) -> List[MeasureResult]:
        """
        Feed one sample

        Returns:
            Results completed by this sample
        """
        completed = []

        for i, (start, end) in enumerate(self.speed_config):
            if speed <= start:
                self._armed_at[i] = time
            elif i in self._armed_at and speed >= end:
                started = self._armed_at.pop(i)
                result = MeasureResult(start, end, (time - started) / DynoConstants.TIME_BASE)
                completed.append(result)

        for result in completed:
            self.results.append(result)
            if self.on_result is not None:
                self.on_result(result)

        return completed

    def reset(self) -> None:
        self.results = []
        self._armed_at = {}
