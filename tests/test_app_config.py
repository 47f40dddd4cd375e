"""Tests for the JSON preferences file."""

import pytest

from utils import app_config


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    config_dir = tmp_path / ".finance_tracker"
    monkeypatch.setattr(app_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_dir / "config.json")
    return config_dir


class TestLoadConfig:
    def test_missing_file(self):
        assert app_config.load_config() == {}

    def test_corrupt_file(self, config_home):
        config_home.mkdir()
        (config_home / "config.json").write_text("{not json", encoding="utf-8")
        assert app_config.load_config() == {}

    def test_non_dict_content(self, config_home):
        config_home.mkdir()
        (config_home / "config.json").write_text("[1, 2]", encoding="utf-8")
        assert app_config.load_config() == {}


class TestSettings:
    def test_defaults(self):
        assert app_config.get_setting("currency_symbol") == "₹"
        assert app_config.get_setting("date_format") == "YYYY-MM-DD"
        assert app_config.get_setting("unknown") == ""

    def test_set_and_clear(self, config_home):
        app_config.set_setting("currency_symbol", "$")
        assert app_config.get_setting("currency_symbol") == "$"
        assert not (config_home / "config.tmp").exists()
        app_config.set_setting("currency_symbol", None)
        assert app_config.get_setting("currency_symbol") == "₹"

    def test_data_folder(self, tmp_path):
        assert app_config.get_data_folder() == str(app_config.APP_DIR)
        app_config.set_data_folder(str(tmp_path))
        assert app_config.get_data_folder() == str(tmp_path)


class TestLauncherOptions:
    """Command line options are persisted before the window starts."""

    @pytest.fixture
    def launcher(self):
        pytest.importorskip("customtkinter")
        import main
        return main

    def test_options_are_saved(self, launcher, tmp_path):
        args = launcher.parse_args([
            "--data-folder", str(tmp_path), "--currency", "$", "--date-format", "DD/MM/YYYY",
        ])
        launcher.apply_args(args)
        assert app_config.get_data_folder() == str(tmp_path)
        assert app_config.get_setting("currency_symbol") == "$"
        assert app_config.get_setting("date_format") == "DD/MM/YYYY"
        assert app_config.get_setting("appearance_mode") == "system"

    def test_no_options_leave_config_alone(self, launcher, config_home):
        launcher.apply_args(launcher.parse_args([]))
        assert not (config_home / "config.json").exists()

    def test_unknown_date_format_rejected(self, launcher):
        with pytest.raises(SystemExit):
            launcher.parse_args(["--date-format", "YYYYMMDD"])
