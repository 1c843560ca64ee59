"""
Power and torque calculation functions
"""

import numpy as np
from typing import Dict

from constants import DynoConstants
from calibration import CalibrationConfig
from data_processing import DataProcessor
from records import RecordStore


class PowerCalculator:
    """Handles power, torque and loss calculations from speed samples"""

    def __init__(self, calibration: CalibrationConfig = None):
        self.calibration = calibration or CalibrationConfig()
        self.data_processor = DataProcessor()

    def calculate_physics(self, speed: np.ndarray, time: np.ndarray) -> Dict[str, np.ndarray]:
        """
        Derive kinetic energy, power, torque and losses for a speed series

        Every sample is derived from itself and its predecessor only. The
        first sample uses a predecessor with zero time, energy and power.
        Samples with zero measure time are skipped and keep zero in every
        derived field, and a skipped sample passes zero energy and power on
        to its successor.

        Args:
            speed: Vehicle speed in km/h
            time: Sample time in hundredths of a second

        Returns:
            Dictionary of derived arrays keyed by record field name
        """
        calibration = self.calibration
        speed = np.asarray(speed, dtype=float)
        time = np.asarray(time, dtype=float)
        length = len(speed)

        previous_time = np.concatenate(([0.0], time[:-1])) if length else time
        measure_time = (time - previous_time) / DynoConstants.TIME_BASE
        derived = measure_time != 0

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            engine_speed = speed * DynoConstants.REFERENCE_RPM / calibration.speed_at_3000_rpm_kmh
            speed_ms = speed * DynoConstants.KMH_TO_MS
            ek = np.where(derived, calibration.weight_kg * speed_ms ** 2 / 2, 0.0)

            previous_ek = np.concatenate(([0.0], ek[:-1])) if length else ek
            delta_ek = np.where(derived, (ek - previous_ek) / measure_time, 0.0)
            power_kw = delta_ek / 1000
            power_km = power_kw / DynoConstants.KW_TO_KM

            # Torque is taken from the previous sample's power
            previous_power_kw = np.concatenate(([0.0], power_kw[:-1])) if length else power_kw
            torque = self._per_engine_speed(DynoConstants.TORQUE_FACTOR * previous_power_kw, engine_speed)

            wheel_loss = calibration.wheel_loss_coefficient * speed ** 2
            air_loss = (DynoConstants.AIR_LOSS_FACTOR * calibration.drag_coefficient
                        * calibration.frontal_surface_m2 * calibration.air_density
                        * speed_ms ** 3 * DynoConstants.AIR_LOSS_KM_FACTOR)
            loss_km = wheel_loss + air_loss
            power_km_with_loss = power_km + wheel_loss + air_loss
            torque_with_loss = self._per_engine_speed(
                DynoConstants.TORQUE_FACTOR * power_km_with_loss / DynoConstants.KM_PER_KW_TORQUE, engine_speed
            )

        results = {
            'measure_time_sec': measure_time,
            'engine_speed_rpm': engine_speed,
            'speed_ms': speed_ms,
            'ek': ek,
            'delta_ek_per_sec': delta_ek,
            'power_kw': power_kw,
            'power_km': power_km,
            'torque_nm': torque,
            'loss_power_km': loss_km,
            'power_km_with_loss': power_km_with_loss,
            'torque_with_loss': torque_with_loss,
        }

        # measure_time is kept as computed; every other field stays zero for skipped samples
        for name, values in results.items():
            if name != 'measure_time_sec':
                results[name] = np.where(derived, values, 0.0)

        return results

    def calculate_smoothing(self, power_km_with_loss: np.ndarray, torque_with_loss: np.ndarray) -> Dict[str, np.ndarray]:
        """Two-pass weighted smoothing of the loss-corrected power and torque curves"""
        power_avg, power_avg2 = self.data_processor.smooth_two_pass(power_km_with_loss)
        torque_avg, torque_avg2 = self.data_processor.smooth_two_pass(torque_with_loss)

        return {
            'power_km_avg': power_avg,
            'torque_avg': torque_avg,
            'power_km_avg2': power_avg2,
            'torque_avg2': torque_avg2,
        }

    def calculate_records(self, records: RecordStore) -> None:
        """
        Recompute every derived field of every record in place

        Physics is derived for the whole store first, then both smoothing
        passes run over the complete series.
        """
        if len(records) == 0:
            return

        physics = self.calculate_physics(records.column('speed'), records.column('time'))
        smoothed = self.calculate_smoothing(physics['power_km_with_loss'], physics['torque_with_loss'])

        fields = {**physics, **smoothed}
        for name, values in fields.items():
            for record, value in zip(records, values):
                setattr(record, name, float(value))

    @staticmethod
    def _per_engine_speed(numerator: np.ndarray, engine_speed: np.ndarray) -> np.ndarray:
        """Divide by engine speed, giving 0 wherever the result would not be finite"""
        result = numerator / engine_speed
        return np.where(np.isfinite(result), result, 0.0)
