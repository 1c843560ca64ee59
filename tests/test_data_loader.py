import numpy as np
import pytest

from constants import DynoConstants
from data_loader import DataLoader, gps_time_to_hundredths, unwrap_midnight


def test_gps_time_to_hundredths():
    assert gps_time_to_hundredths(12345678) == ((12 * 60 + 34) * 60 + 56) * 100 + 78
    assert gps_time_to_hundredths(0) == 0
    assert gps_time_to_hundredths(1) == 1
    # Hours below ten lose their leading zero in the packed value
    assert gps_time_to_hundredths(9000000) == 9 * 3600 * 100


def test_gps_time_difference_across_minute():
    before = gps_time_to_hundredths(12345999)
    after = gps_time_to_hundredths(12350009)

    assert after - before == 10


def test_unwrap_midnight():
    times = [DynoConstants.HUNDREDTHS_PER_DAY - 20, DynoConstants.HUNDREDTHS_PER_DAY - 10, 0, 10]

    unwrapped = unwrap_midnight(times)

    assert np.all(np.diff(unwrapped) == 10)


def test_unwrap_midnight_short_series():
    assert list(unwrap_midnight([5])) == [5]
    assert len(unwrap_midnight([])) == 0


def test_load_gps_log(tmp_path):
    path = tmp_path / "race-gps-raw-data.csv"
    path.write_text(
        "satellites,alt,time,speed\n"
        "9,12000,12345990,50.5\n"
        "9,12010,12350000,51.2\n"
        "8,,12350010,x\n"
        "8,12030,12350020,52.0\n"
    )

    data = DataLoader().load_data(str(path))

    assert len(data) == 3
    assert list(data['speed']) == pytest.approx([50.5, 51.2, 52.0])
    assert list(np.diff(data['time'])) == pytest.approx([10, 20])


def test_load_hundredths_log(tmp_path):
    path = tmp_path / "log.csv"
    path.write_text("time,speed\n100,10\n110,11\n")

    data = DataLoader(time_format='hundredths').load_data(str(path))

    assert list(data['time']) == [100, 110]


def test_missing_columns_raise(tmp_path):
    path = tmp_path / "log.csv"
    path.write_text("time,velocity\n100,10\n")

    with pytest.raises(ValueError, match="speed"):
        DataLoader().load_data(str(path))


def test_missing_file_raises(tmp_path):
    with pytest.raises(ValueError, match="Error loading CSV data"):
        DataLoader().load_data(str(tmp_path / "missing.csv"))


def test_unknown_time_format():
    with pytest.raises(ValueError):
        DataLoader(time_format='iso')
