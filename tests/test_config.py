import pytest

from directions.config import ConfigError, load_config
from segments.policy import SegmentMode


@pytest.fixture
def env():
    return {
        "START_LAT": "40.8075",
        "START_LON": "-73.9626",
        "START_NAME": "Columbia University",
        "START_ADDRESS": "116th St & Broadway, New York, NY",
        "END_LAT": "41.5787",
        "END_LON": "-73.4959",
        "END_NAME": "Sherman",
        "END_ADDRESS": "Sherman, CT",
    }


def test_defaults(env):
    config = load_config(env)

    assert config.start.name == "Columbia University"
    assert config.end.lon == -73.4959
    assert config.segmentation.mode is SegmentMode.DISTANCE
    assert config.segmentation.target_distance_m == pytest.approx(1609.34)
    assert config.output_dir == "output"
    assert config.render_workers == 1
    assert config.osrm_base_url is None


def test_count_mode(env):
    env.update({"SEGMENT_MODE": "count", "NUM_SEGMENTS": "12"})
    config = load_config(env)

    assert config.segmentation.mode is SegmentMode.COUNT
    assert config.segmentation.segment_count == 12


def test_steps_mode_and_miles(env):
    env["SEGMENT_MODE"] = "STEPS"
    assert load_config(env).segmentation.steps_per_segment == 8

    env.update({"SEGMENT_MODE": "distance", "MILES_PER_SEGMENT": "2.5"})
    assert load_config(env).segmentation.target_distance_m == pytest.approx(2.5 * 1609.34)


def test_missing_required_variable(env):
    del env["END_NAME"]
    with pytest.raises(ConfigError, match="END_NAME"):
        load_config(env)


def test_non_numeric_coordinate(env):
    env["START_LAT"] = "north"
    with pytest.raises(ConfigError, match="START_LAT"):
        load_config(env)


def test_out_of_range_coordinate(env):
    env["END_LON"] = "200"
    with pytest.raises(ConfigError, match="END_LON"):
        load_config(env)


def test_bad_segment_settings(env):
    env["SEGMENT_MODE"] = "hourly"
    with pytest.raises(ConfigError, match="SEGMENT_MODE"):
        load_config(env)

    env.update({"SEGMENT_MODE": "count", "NUM_SEGMENTS": "0"})
    with pytest.raises(ConfigError):
        load_config(env)

    env["NUM_SEGMENTS"] = "ten"
    with pytest.raises(ConfigError, match="NUM_SEGMENTS"):
        load_config(env)
