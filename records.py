"""
Record types and the append-only record store
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

import numpy as np


class RecordStatus(Enum):
    """Run phase a record belongs to"""
    UNSET = "unset"
    POWER = "power"
    LOSS = "loss"


# Fields recomputed on every read of the power curve
DERIVED_FIELDS = (
    'speed_ms', 'engine_speed_rpm', 'measure_time_sec', 'ek', 'delta_ek_per_sec',
    'power_kw', 'power_km', 'torque_nm', 'loss_power_km', 'power_km_with_loss',
    'torque_with_loss', 'power_km_avg', 'torque_avg', 'power_km_avg2', 'torque_avg2',
)


@dataclass
class DynoRecord:
    """One ingested speed sample plus the fields derived from it"""
    speed: float
    time: float  # hundredths of a second
    alt: Optional[float] = None
    satellites: Optional[int] = None
    increment: bool = True
    decrement: bool = True
    status: RecordStatus = RecordStatus.UNSET

    speed_ms: float = 0.0
    engine_speed_rpm: float = 0.0
    measure_time_sec: float = 0.0
    ek: float = 0.0  # kinetic energy, J
    delta_ek_per_sec: float = 0.0
    power_kw: float = 0.0
    power_km: float = 0.0  # metric horsepower
    torque_nm: float = 0.0
    loss_power_km: float = 0.0
    power_km_with_loss: float = 0.0
    torque_with_loss: float = 0.0
    power_km_avg: float = 0.0
    torque_avg: float = 0.0
    power_km_avg2: float = 0.0
    torque_avg2: float = 0.0


class RecordStore:
    """Ordered, append-only sequence of records for one measurement session"""

    def __init__(self):
        self._records: List[DynoRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DynoRecord]:
        return iter(self._records)

    def __getitem__(self, index):
        return self._records[index]

    @property
    def last(self) -> Optional[DynoRecord]:
        return self._records[-1] if self._records else None

    @property
    def second_to_last(self) -> Optional[DynoRecord]:
        return self._records[-2] if len(self._records) > 1 else None

    def append(self, speed: float, time: float, alt: Optional[float] = None,
               satellites: Optional[int] = None) -> DynoRecord:
        """
        Append a sample, computing its direction flags against the last record

        Flags compare the floor of both speeds, so a plateau counts as both
        increasing and decreasing. The first record of a session has no
        predecessor and gets both flags set.
        """
        previous = self.last
        if previous is None:
            increment = decrement = True
        else:
            current_floor = np.floor(speed)
            previous_floor = np.floor(previous.speed)
            increment = bool(current_floor >= previous_floor)
            decrement = bool(current_floor <= previous_floor)

        record = DynoRecord(
            speed=speed,
            time=time,
            alt=alt,
            satellites=satellites,
            increment=increment,
            decrement=decrement,
        )
        self._records.append(record)
        return record

    def tail(self, count: int) -> List[DynoRecord]:
        """Last ``count`` records, fewer if the store is shorter"""
        if count <= 0:
            return []
        return self._records[-count:]

    def with_status(self, status: RecordStatus) -> List[DynoRecord]:
        return [record for record in self._records if record.status is status]

    def column(self, name: str) -> np.ndarray:
        """Values of one record field as a float array"""
        return np.array([getattr(record, name) for record in self._records], dtype=float)

    def clear(self) -> None:
        self._records = []
