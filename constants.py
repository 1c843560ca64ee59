"""
Constants and analysis parameters for the dyno engine
"""


class DynoConstants:
    """Constants used throughout the dyno calculations"""

    # Unit conversion factors
    KMH_TO_MS = 0.277777778
    KW_TO_KM = 0.73549875  # 1 metric horsepower in kW
    KM_PER_KW_TORQUE = 1.36
    TORQUE_FACTOR = 9549.3  # Nm * rpm per kW
    REFERENCE_RPM = 3000
    TIME_BASE = 100  # hundredths of a second

    # Air loss model
    AIR_LOSS_FACTOR = 0.0005
    AIR_LOSS_KM_FACTOR = 1.359

    # Smoothing tap tables as (offset, weight) pairs
    FIRST_PASS_TAPS = (
        (-4, 0.2), (-3, 0.4), (-2, 0.8), (-1, 1.0), (0, 1.0),
        (1, 1.0), (2, 0.8), (3, 0.4), (4, 0.2),
    )
    DEFAULT_TAPS = ((-2, 0.4), (-1, 0.6), (0, 1.0), (1, 0.6), (2, 0.4))

    # Segmentation
    DEFAULT_MINIMUM_RECORDS_TO_MEASURE = 20

    # Calibration defaults used by the command line
    DEFAULT_WEIGHT_KG = 1200
    DEFAULT_SPEED_AT_3000_RPM = 100
    DEFAULT_DRAG_COEFFICIENT = 0.32
    DEFAULT_FRONTAL_SURFACE = 2.0
    DEFAULT_WHEEL_LOSS = 0.0003
    DEFAULT_AIR_DENSITY = 1.225

    # Speed windows timed during a session (km/h)
    DEFAULT_SPEED_INTERVALS = ((0, 60), (0, 100), (100, 150), (100, 200))

    # Packed GPS clock
    HUNDREDTHS_PER_DAY = 24 * 60 * 60 * 100
