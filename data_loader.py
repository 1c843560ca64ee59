"""
Loading of recorded GPS speed logs
"""

import numpy as np
from typing import Sequence

from constants import DynoConstants

# Lazy imports for heavy dependencies
def _import_pandas():
    import pandas as pd
    return pd


def gps_time_to_hundredths(value: float) -> int:
    """
    Convert a packed HHMMSScc GPS clock reading to hundredths since midnight

    >>> gps_time_to_hundredths(12345678)
    4529678
    """
    packed = int(value)
    hours, rest = divmod(packed, 1000000)
    minutes, rest = divmod(rest, 10000)
    seconds, hundredths = divmod(rest, 100)
    return ((hours * 60 + minutes) * 60 + seconds) * DynoConstants.TIME_BASE + hundredths


def unwrap_midnight(times: Sequence[float]) -> np.ndarray:
    """Add a day to every sample after the clock rolls over midnight"""
    times = np.asarray(times, dtype=float)
    if len(times) < 2:
        return times
    rollovers = np.concatenate(([0], np.cumsum(np.diff(times) < 0)))
    return times + rollovers * DynoConstants.HUNDREDTHS_PER_DAY


class DataLoader:
    """Handles CSV loading of raw speed samples"""

    REQUIRED_COLUMNS = ('time', 'speed')
    OPTIONAL_COLUMNS = ('alt', 'satellites')

    def __init__(self, time_format: str = 'gps'):
        if time_format not in ('gps', 'hundredths'):
            raise ValueError(f"Unknown time format: {time_format}")
        self.time_format = time_format
        self.data = None

    def load_data(self, csv_path: str) -> 'pd.DataFrame':
        """
        Load a raw sample log and normalize its time base

        The log is the raw export of the measuring app: one row per sample
        with ``satellites``, ``alt``, ``time`` and ``speed`` columns.
        Rows without a usable time or speed are dropped.

        Returns:
            DataFrame with a ``time`` column in hundredths of a second
        """
        pd = _import_pandas()
        try:
            data = pd.read_csv(csv_path)
        except Exception as e:
            raise ValueError(f"Error loading CSV data: {e}")

        data.columns = [str(col).strip('"').strip() for col in data.columns]

        missing = [col for col in self.REQUIRED_COLUMNS if col not in data.columns]
        if missing:
            raise ValueError(f"Required columns not found in data: {', '.join(missing)}")

        for col in self.REQUIRED_COLUMNS + self.OPTIONAL_COLUMNS:
            if col in data.columns:
                data[col] = pd.to_numeric(data[col], errors='coerce')

        original_count = len(data)
        data = data.dropna(subset=list(self.REQUIRED_COLUMNS)).reset_index(drop=True)
        if len(data) < original_count:
            print(f"Dropped {original_count - len(data)} rows without time or speed")

        if self.time_format == 'gps':
            data['time'] = unwrap_midnight([gps_time_to_hundredths(value) for value in data['time']])

        self.data = data
        print(f"Loaded {len(data)} samples from {csv_path}")
        return data
