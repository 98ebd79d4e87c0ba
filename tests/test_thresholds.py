import math

from adaptive_engine.enums import Level, TimeOfDay
from adaptive_engine.thresholds import bucket, clamp, clamp_level, clamp_unit, time_of_day_for_hour


def test_bucket_boundaries():
    assert bucket(0) == Level.LOW
    assert bucket(40) == Level.LOW
    assert bucket(40.5) == Level.MEDIUM
    assert bucket(70) == Level.MEDIUM
    assert bucket(71) == Level.HIGH
    assert bucket(100) == Level.HIGH


def test_bucket_values_compare_as_strings():
    assert bucket(90) == "high"
    assert bucket(10).value == "low"


def test_clamp_handles_out_of_range_and_garbage():
    assert clamp_level(150) == 100.0
    assert clamp_level(-5) == 0.0
    assert clamp_unit(1.7) == 1.0
    assert clamp_unit("0.25") == 0.25
    assert clamp("not a number", 0, 100) == 0.0
    assert clamp(None, 0, 1) == 0.0
    assert clamp(math.nan, 0, 100) == 0.0
    assert clamp(math.inf, 0, 100) == 100.0
    assert clamp(-math.inf, 0, 100) == 0.0


def test_time_of_day_for_hour():
    assert time_of_day_for_hour(0) == TimeOfDay.MORNING
    assert time_of_day_for_hour(11) == TimeOfDay.MORNING
    assert time_of_day_for_hour(12) == TimeOfDay.AFTERNOON
    assert time_of_day_for_hour(16) == TimeOfDay.AFTERNOON
    assert time_of_day_for_hour(17) == TimeOfDay.EVENING
    assert time_of_day_for_hour(20) == TimeOfDay.EVENING
    assert time_of_day_for_hour(21) == TimeOfDay.NIGHT
    assert time_of_day_for_hour(23) == TimeOfDay.NIGHT
