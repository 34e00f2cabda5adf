from tempmatrix.columns import ColumnMapping, detect_columns


def test_tmax_tmin_pair():
    cols = detect_columns({"Date": "2020-01-01", "TMAX": "10", "TMIN": "2"})
    assert cols == ColumnMapping(date_key="Date", max_key="TMAX", min_key="TMIN", single_temp_key=None)


def test_exact_date_beats_substring():
    cols = detect_columns(["obs_date", "DATE", "tmax"])
    assert cols.date_key == "DATE"


def test_date_substring_then_first_key_fallback():
    assert detect_columns(["station", "ObsDate", "temp"]).date_key == "ObsDate"
    assert detect_columns(["day", "temp"]).date_key == "day"


def test_compound_names_before_bare_max():
    cols = detect_columns(["date", "max_gust", "temperature_max", "temperature_min"])
    assert cols.max_key == "temperature_max"
    assert cols.min_key == "temperature_min"


def test_bare_max_min_tier():
    cols = detect_columns(["date", "Max", "Min"])
    assert cols.max_key == "Max"
    assert cols.min_key == "Min"


def test_single_temperature_column():
    cols = detect_columns(["Date", "Temperature"])
    assert cols.max_key is None and cols.min_key is None
    assert cols.single_temp_key == "Temperature"
    assert cols.tmax_source() == "Temperature"
    assert cols.tmin_source() == "Temperature"


def test_value_column_is_last_resort():
    assert detect_columns(["date", "value"]).single_temp_key == "value"


def test_first_key_in_record_order_wins_within_tier():
    cols = detect_columns(["date", "temp_a", "temp_b"])
    assert cols.single_temp_key == "temp_a"


def test_nothing_detected_is_not_an_error():
    cols = detect_columns(["when", "reading"])
    assert cols.date_key == "when"
    assert not cols.has_temperature
    assert detect_columns([]) == ColumnMapping()


def test_detection_is_deterministic():
    sample = {"Date": "x", "tmax (C)": "1", "tmin (C)": "0", "temp": "0"}
    assert detect_columns(sample) == detect_columns(dict(sample))
