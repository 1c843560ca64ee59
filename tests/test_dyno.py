import math

import pytest

from calibration import CalibrationConfig
from dyno import Dyno
from records import RecordStatus


def session_speeds():
    return [150, 140] + list(range(141, 162)) + [155] + list(range(154, 134, -1))


def configured_dyno(minimum=20):
    dyno = Dyno(minimum)
    dyno.set_config(1000, 120, 0.3, 2, 0.0002, 1.2)
    return dyno


def run_session(dyno, speeds, start_time=100):
    for i, speed in enumerate(speeds):
        dyno.add_record(speed, start_time + i * 10, alt=12000 + i, satellites=9)


def test_empty_engine_returns_no_records():
    dyno = configured_dyno()

    assert dyno.get_power_records() == []
    assert dyno.get_loss_records() == []


def test_store_is_append_only_in_call_order():
    dyno = configured_dyno()
    speeds = session_speeds()

    for n, speed in enumerate(speeds, start=1):
        dyno.add_record(speed, 100 + n * 10)
        assert len(dyno.records) == n

    assert [record.time for record in dyno.records] == [100 + n * 10 for n in range(1, len(speeds) + 1)]
    assert [record.speed for record in dyno.records] == speeds


def test_optional_fields_are_copied():
    dyno = configured_dyno()

    dyno.add_record(50, 100, alt=15000, satellites=7)
    dyno.add_record(51, 110)

    assert dyno.records[0].alt == 15000
    assert dyno.records[0].satellites == 7
    assert dyno.records[1].alt is None
    assert dyno.records[1].satellites is None


def test_power_and_loss_records():
    dyno = configured_dyno()
    run_session(dyno, session_speeds())

    power = dyno.get_power_records()
    loss = dyno.get_loss_records()

    assert len(power) == 22
    assert len(loss) == 20
    assert all(record.status is RecordStatus.POWER for record in power)
    assert all(record.status is RecordStatus.LOSS for record in loss)
    assert [r.time for r in power] == sorted(r.time for r in power)
    assert power[-1].time < loss[0].time


def test_power_records_carry_smoothed_curves():
    dyno = configured_dyno()
    run_session(dyno, session_speeds())

    power = dyno.get_power_records()

    for record in power:
        assert record.engine_speed_rpm == pytest.approx(record.speed * 3000 / 120)
        assert math.isfinite(record.power_km_avg2)
        assert math.isfinite(record.torque_avg2)
    # Accelerating steadily produces positive power in the middle of the run
    assert power[len(power) // 2].power_km_avg2 > 0


def test_loss_records_are_not_recomputed():
    dyno = configured_dyno()
    run_session(dyno, session_speeds())

    loss = dyno.get_loss_records()
    assert all(record.loss_power_km == 0.0 for record in loss)

    dyno.get_power_records()
    loss = dyno.get_loss_records()
    assert all(record.loss_power_km > 0 for record in loss)
    # Coasting down means kinetic energy is being lost
    assert all(record.power_kw < 0 for record in loss)


def test_get_power_records_is_repeatable():
    dyno = configured_dyno()
    run_session(dyno, session_speeds())

    first = [(r.time, r.power_km_avg2, r.torque_avg2) for r in dyno.get_power_records()]
    second = [(r.time, r.power_km_avg2, r.torque_avg2) for r in dyno.get_power_records()]

    assert first == second


def test_set_config_applies_on_next_read():
    dyno = configured_dyno()
    run_session(dyno, session_speeds())
    before = dyno.get_power_records()[5].power_kw

    dyno.set_config(2000, 120, 0.3, 2, 0.0002, 1.2)

    assert dyno.records[7].power_kw == pytest.approx(before)
    assert dyno.get_power_records()[5].power_kw == pytest.approx(2 * before)


def test_set_calibration_replaces_config():
    dyno = Dyno()
    calibration = CalibrationConfig(weight_kg=900, speed_at_3000_rpm_kmh=95)

    dyno.set_calibration(calibration)

    assert dyno.calibration is calibration


def test_reset_behaves_like_fresh_session():
    dyno = configured_dyno()
    run_session(dyno, session_speeds())

    dyno.reset()

    assert len(dyno.records) == 0
    assert dyno.get_power_records() == []
    assert dyno.get_loss_records() == []

    fresh = configured_dyno()
    for engine in (dyno, fresh):
        run_session(engine, list(range(100, 121)), start_time=5000)

    assert [r.status for r in dyno.records] == [r.status for r in fresh.records]
    assert dyno.records[0].increment and dyno.records[0].decrement
    assert len(dyno.get_power_records()) == 21


def test_unconfigured_engine_does_not_raise():
    dyno = Dyno()
    run_session(dyno, session_speeds() + [0, 0, 0])

    for record in dyno.get_power_records():
        assert record.power_kw == 0.0
        assert record.torque_avg2 == 0.0
