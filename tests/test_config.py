import tomllib

import pytest

from breakclock.core.config import (
    ConfigError,
    TimerConfig,
    default_config_path,
    load_config_env,
    load_config_file,
    render_config,
)


def test_defaults_are_twenty_and_twenty_five_minutes() -> None:
    config = TimerConfig()

    assert config.warn_threshold_seconds == 1200
    assert config.alert_threshold_seconds == 1500
    assert config.start_running is True


def test_warn_must_be_below_alert() -> None:
    with pytest.raises(ConfigError):
        TimerConfig(warn_threshold_seconds=300, alert_threshold_seconds=300)
    with pytest.raises(ConfigError):
        TimerConfig(warn_threshold_seconds=-1, alert_threshold_seconds=10)


def test_from_mapping_accepts_minute_keys() -> None:
    config = TimerConfig.from_mapping({"warn_after_minutes": 45, "danger_after_minutes": 60})

    assert config.warn_threshold_seconds == 45 * 60
    assert config.alert_threshold_seconds == 60 * 60


def test_from_mapping_prefers_seconds_keys() -> None:
    config = TimerConfig.from_mapping(
        {"warn_threshold_seconds": 10, "warn_after_minutes": 45, "alert_threshold_seconds": 20}
    )

    assert config.warn_threshold_seconds == 10


def test_from_mapping_rejects_wrong_types() -> None:
    with pytest.raises(ConfigError):
        TimerConfig.from_mapping({"warn_threshold_seconds": "ten"})
    with pytest.raises(ConfigError):
        TimerConfig.from_mapping({"window_size": [1, 2, 3]})


def test_missing_file_is_created_with_defaults(tmp_path) -> None:
    path = tmp_path / "nested" / "breakclock.toml"

    config = load_config_file(path)

    assert config == TimerConfig()
    assert path.exists()
    with path.open("rb") as fh:
        assert TimerConfig.from_mapping(tomllib.load(fh)) == TimerConfig()


def test_missing_file_not_created_when_disabled(tmp_path) -> None:
    path = tmp_path / "breakclock.toml"

    load_config_file(path, create=False)

    assert not path.exists()


def test_load_file_reads_values(tmp_path) -> None:
    path = tmp_path / "breakclock.toml"
    path.write_text(
        "warn_threshold_seconds = 60\n"
        "alert_threshold_seconds = 120\n"
        "always_on_top = true\n"
        "window_size = [200.0, 90.0]\n",
        encoding="utf-8",
    )

    config = load_config_file(path)

    assert config.warn_threshold_seconds == 60
    assert config.alert_threshold_seconds == 120
    assert config.always_on_top is True
    assert config.window_size == (200, 90)


def test_malformed_file_falls_back_to_defaults(tmp_path, caplog) -> None:
    path = tmp_path / "breakclock.toml"
    path.write_text("warn_threshold_seconds = = 3\n", encoding="utf-8")

    assert load_config_file(path) == TimerConfig()
    assert "using defaults" in caplog.text


def test_inverted_thresholds_fall_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "breakclock.toml"
    path.write_text("warn_threshold_seconds = 500\nalert_threshold_seconds = 100\n", encoding="utf-8")

    assert load_config_file(path) == TimerConfig()


def test_load_env_reads_thresholds() -> None:
    config = load_config_env(
        {"BREAKCLOCK_WARN_THRESHOLD_SECONDS": "30", "BREAKCLOCK_ALERT_THRESHOLD_SECONDS": " 90 "}
    )

    assert config.warn_threshold_seconds == 30
    assert config.alert_threshold_seconds == 90


def test_load_env_without_variables_uses_defaults() -> None:
    assert load_config_env({}) == TimerConfig()


def test_load_env_malformed_falls_back_to_defaults() -> None:
    assert load_config_env({"BREAKCLOCK_WARN_THRESHOLD_SECONDS": "soon"}) == TimerConfig()


def test_default_path_honours_xdg(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr("breakclock.core.config.sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert default_config_path() == tmp_path / "breakclock.toml"


def test_render_config_is_valid_toml() -> None:
    data = tomllib.loads(render_config(TimerConfig(always_on_top=True)))

    assert data["always_on_top"] is True
    assert data["window_position"] == [40, 40]


def test_undecodable_file_falls_back_to_defaults(tmp_path, caplog) -> None:
    path = tmp_path / "breakclock.toml"
    path.write_bytes(b"warn_threshold_seconds = 60\n# \xff\xfe\n")

    assert load_config_file(path) == TimerConfig()
    assert "using defaults" in caplog.text


def test_start_unpaused_maps_to_start_running() -> None:
    assert TimerConfig.from_mapping({"start_unpaused": False}).start_running is False
    assert TimerConfig.from_mapping({"start_unpaused": True, "start_running": False}).start_running is False


def test_conflict_with_default_threshold_names_both_keys(tmp_path, caplog) -> None:
    path = tmp_path / "breakclock.toml"
    path.write_text("warn_after_minutes = 30\nalways_on_top = true\n", encoding="utf-8")

    assert load_config_file(path) == TimerConfig()
    assert "warn_after_minutes=1800s" in caplog.text
    assert "default alert_threshold_seconds=1500s" in caplog.text


def test_default_path_on_macos_uses_application_support(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr("breakclock.core.config.sys.platform", "darwin")
    monkeypatch.setattr("breakclock.core.config.Path.home", lambda: tmp_path)

    assert default_config_path() == tmp_path / "Library" / "Application Support" / "breakclock.toml"
