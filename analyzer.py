"""
Main DynoAnalyzer class that orchestrates all modules
"""

import numpy as np
from typing import List, Optional, Sequence, Tuple

from constants import DynoConstants
from calibration import CalibrationConfig
from data_loader import DataLoader
from dyno import Dyno
from interval_timer import IntervalTimer
from records import DERIVED_FIELDS, DynoRecord

# Lazy imports for heavy dependencies
def _import_pandas():
    import pandas as pd
    return pd


def records_to_dataframe(records: Sequence[DynoRecord]) -> 'pd.DataFrame':
    """Tabulate records, one row per record"""
    pd = _import_pandas()
    columns = ['time', 'speed', 'alt', 'satellites', 'status'] + list(DERIVED_FIELDS)
    rows = []
    for record in records:
        row = {name: getattr(record, name) for name in columns}
        row['status'] = record.status.value
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


class DynoAnalyzer:
    """Replays a recorded speed log through the dyno engine and reports on it"""

    def __init__(self, calibration: CalibrationConfig,
                 minimum_records_to_measure: int = DynoConstants.DEFAULT_MINIMUM_RECORDS_TO_MEASURE,
                 time_format: str = 'gps',
                 speed_intervals: Sequence[Tuple[float, float]] = DynoConstants.DEFAULT_SPEED_INTERVALS):
        self.calibration = calibration

        # Initialize sub-modules
        self.data_loader = DataLoader(time_format)
        self.dyno = Dyno(minimum_records_to_measure, calibration)
        self.interval_timer = IntervalTimer(speed_intervals)

        self.data = None
        self.power_records: List[DynoRecord] = []
        self.loss_records: List[DynoRecord] = []

    def load_data(self, csv_path: str) -> None:
        self.data = self.data_loader.load_data(csv_path)

    def replay(self) -> List[DynoRecord]:
        """
        Feed every loaded sample through the engine and the interval timer

        Returns:
            Records of the detected power run
        """
        if self.data is None:
            raise ValueError("No data loaded. Call load_data() first.")

        self.dyno.reset()
        self.interval_timer.reset()

        has_alt = 'alt' in self.data.columns
        has_satellites = 'satellites' in self.data.columns

        for row in self.data.itertuples(index=False):
            alt = _optional(getattr(row, 'alt')) if has_alt else None
            satellites = _optional(getattr(row, 'satellites')) if has_satellites else None
            if satellites is not None:
                satellites = int(satellites)
            self.dyno.add_record(float(row.speed), float(row.time), alt, satellites)
            self.interval_timer.add_record(float(row.speed), float(row.time))

        # Power first: it refreshes the derived fields the loss run reports on
        self.power_records = self.dyno.get_power_records()
        self.loss_records = self.dyno.get_loss_records()
        return self.power_records

    def generate_report(self) -> str:
        """Generate a text report of the analysis"""
        report = ["Dyno Analysis Report", "=" * 40, ""]

        report.extend([
            "Calibration:",
            f"  Weight: {self.calibration.weight_kg:.0f} kg",
            f"  Speed at 3000 RPM: {self.calibration.speed_at_3000_rpm_kmh:.1f} km/h "
            f"({self.calibration.engine_ratio_rpm_per_kmh:.1f} RPM per km/h)",
            f"  Drag Coefficient: {self.calibration.drag_coefficient:.3f}",
            f"  Frontal Surface: {self.calibration.frontal_surface_m2:.2f} m²",
            f"  Wheel Loss Coefficient: {self.calibration.wheel_loss_coefficient:.5f}",
            f"  Air Density: {self.calibration.air_density:.3f} kg/m³",
            ""
        ])

        if self.power_records:
            power = np.array([r.power_km_avg2 for r in self.power_records])
            torque = np.array([r.torque_avg2 for r in self.power_records])
            rpm = np.array([r.engine_speed_rpm for r in self.power_records])
            max_power_idx = int(np.argmax(power))
            max_torque_idx = int(np.argmax(torque))

            report.extend([
                f"Power Run: {len(self.power_records)} samples",
                f"  Speed Range: {self.power_records[0].speed:.1f} - {self.power_records[-1].speed:.1f} km/h",
                f"  Duration: {_duration(self.power_records):.2f} seconds",
                f"  Max Power: {power[max_power_idx]:.1f} KM @ {rpm[max_power_idx]:.0f} RPM",
                f"  Max Torque: {torque[max_torque_idx]:.1f} Nm @ {rpm[max_torque_idx]:.0f} RPM",
                ""
            ])
        else:
            report.extend(["No power run found.", ""])

        if self.loss_records:
            loss = np.array([r.loss_power_km for r in self.loss_records])
            report.extend([
                f"Loss Run: {len(self.loss_records)} samples",
                f"  Speed Range: {self.loss_records[0].speed:.1f} - {self.loss_records[-1].speed:.1f} km/h",
                f"  Duration: {_duration(self.loss_records):.2f} seconds",
                f"  Modeled Loss: {loss.min():.1f} - {loss.max():.1f} KM",
                ""
            ])
        else:
            report.extend(["No loss run found.", ""])

        if self.interval_timer.results:
            report.append("Speed Intervals:")
            for result in self.interval_timer.results:
                report.append(f"  {result.start:.0f} - {result.end:.0f} km/h: {result.measure_time:.2f}s")

        return "\n".join(report)

    def generate_debug_output(self, speed_increment: float = 5) -> str:
        """
        Tabular power/torque output for the power run

        Args:
            speed_increment: Speed step in km/h between output rows

        Returns:
            Formatted table, one row per first sample reaching each speed step
        """
        if not self.power_records:
            return "No power run found for debug output."

        table = records_to_dataframe(self.power_records)
        table['speed_step'] = (table['speed'] // speed_increment) * speed_increment
        table = table.drop_duplicates(subset='speed_step', keep='first')

        columns = ['time', 'speed', 'engine_speed_rpm', 'power_km_with_loss', 'power_km_avg2',
                   'torque_with_loss', 'torque_avg2']
        debug_output = [
            "Debug Mode - Tabular Power/Torque Output",
            "=" * 50,
            f"Speed Increment: {speed_increment:g} km/h, {len(table)} rows",
            "",
            table[columns].to_string(index=False, float_format=lambda value: f"{value:.1f}"),
        ]
        return "\n".join(debug_output)


def _optional(value) -> Optional[float]:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return None
    return float(value)


def _duration(records: Sequence[DynoRecord]) -> float:
    return (records[-1].time - records[0].time) / DynoConstants.TIME_BASE
