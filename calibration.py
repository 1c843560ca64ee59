"""
Calibration values for dyno calculations
"""

from dataclasses import dataclass

from constants import DynoConstants


@dataclass
class CalibrationConfig:
    """Vehicle calibration used by the physics derivation"""
    weight_kg: float = 0.0
    speed_at_3000_rpm_kmh: float = 0.0
    drag_coefficient: float = 0.0  # cx
    frontal_surface_m2: float = 0.0
    wheel_loss_coefficient: float = 0.0
    air_density: float = 0.0  # kg/m³
    
    @property
    def engine_ratio_rpm_per_kmh(self) -> float:
        """Engine RPM per km/h of road speed, 0 when uncalibrated"""
        if not self.speed_at_3000_rpm_kmh:
            return 0.0
        return DynoConstants.REFERENCE_RPM / self.speed_at_3000_rpm_kmh
