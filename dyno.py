"""
Dyno engine: turns a live stream of speed samples into power and loss curves
"""

from typing import List, Optional

from constants import DynoConstants
from calibration import CalibrationConfig
from power_calculator import PowerCalculator
from records import DynoRecord, RecordStatus, RecordStore
from run_detector import RunDetector


class Dyno:
    """Measurement engine for one session of speed samples"""

    def __init__(self, minimum_records_to_measure: int = DynoConstants.DEFAULT_MINIMUM_RECORDS_TO_MEASURE,
                 calibration: Optional[CalibrationConfig] = None):
        self.records = RecordStore()
        self.run_detector = RunDetector(minimum_records_to_measure)
        self.power_calculator = PowerCalculator(calibration)

    @property
    def calibration(self) -> CalibrationConfig:
        return self.power_calculator.calibration

    def set_config(self, weight: float, speed_at_3000_rpm: float, cx: float,
                   frontal_surface: float, wheel_loss: float, air_density: float) -> None:
        """Replace the calibration; takes effect on the next read"""
        self.set_calibration(CalibrationConfig(
            weight_kg=weight,
            speed_at_3000_rpm_kmh=speed_at_3000_rpm,
            drag_coefficient=cx,
            frontal_surface_m2=frontal_surface,
            wheel_loss_coefficient=wheel_loss,
            air_density=air_density,
        ))

    def set_calibration(self, calibration: CalibrationConfig) -> None:
        self.power_calculator.calibration = calibration

    def add_record(self, speed: float, time: float, alt: Optional[float] = None,
                   satellites: Optional[int] = None) -> None:
        """
        Ingest one sample

        Args:
            speed: Vehicle speed in km/h
            time: Sample time in hundredths of a second
            alt: Optional altitude reported with the sample
            satellites: Optional number of satellites in the fix
        """
        self.records.append(speed, time, alt, satellites)
        self.run_detector.update(self.records)

    def get_power_records(self) -> List[DynoRecord]:
        """Recompute every derived field, then return the power run in order"""
        self.power_calculator.calculate_records(self.records)
        return self.records.with_status(RecordStatus.POWER)

    def get_loss_records(self) -> List[DynoRecord]:
        """Return the loss run in order, without recomputing derived fields"""
        return self.records.with_status(RecordStatus.LOSS)

    def reset(self) -> None:
        self.records.clear()
        self.run_detector.reset()
