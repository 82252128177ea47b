"""Tests for configuration loading."""

import pytest

from cuerator.core import config as config_module
from cuerator.core.config import (
    Config,
    EDLConfig,
    create_default_config,
    get_config_dir,
    get_data_dir,
    load_config,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point XDG dirs at tmp_path and hide any real API key."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.chdir(tmp_path)


def write_config(tmp_path, text):
    path = tmp_path / "custom.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDirectories:
    """Tests for XDG directory resolution."""

    def test_config_dir(self, tmp_path):
        assert get_config_dir() == tmp_path / "config" / "cuerator"

    def test_data_dir(self, tmp_path):
        assert get_data_dir() == tmp_path / "data" / "cuerator"


class TestEDLConfig:
    """Tests for EDL config validation."""

    def test_defaults_are_valid(self):
        EDLConfig().validate()

    def test_non_positive_frame_rate(self):
        with pytest.raises(ValueError, match="frame_rate"):
            EDLConfig(frame_rate=0).validate()

    def test_negative_tolerance(self):
        with pytest.raises(ValueError, match="merge_tolerance_frames"):
            EDLConfig(merge_tolerance_frames=-1).validate()


class TestLoadConfig:
    """Tests for load_config."""

    def test_sections_are_read(self, tmp_path):
        path = write_config(
            tmp_path,
            """
[edl]
frame_rate = 30
merge_tolerance_frames = 2

[reference]
database_path = "db/commissioned.txt"
commissioned_prefix = "ABC"

[ai]
enabled = false
model = "gpt-4.1-mini"

[export]
output_path = "out.csv"
music_usage = "Feature"

[logging]
level = "debug"
""",
        )

        config = load_config(path)

        assert config.edl.frame_rate == 30
        assert config.edl.merge_tolerance_frames == 2
        assert config.edl.encoding == "utf-8"
        assert config.reference.database_path == "db/commissioned.txt"
        assert config.reference.commissioned_prefix == "ABC"
        assert config.ai.enabled is False
        assert config.ai.model == "gpt-4.1-mini"
        assert config.export.output_path == "out.csv"
        assert config.export.music_usage == "Feature"
        assert config.logging.level == "DEBUG"

    def test_missing_sections_keep_defaults(self, tmp_path):
        config = load_config(write_config(tmp_path, "[export]\nmusic_usage = 'Theme'\n"))
        assert config.edl == EDLConfig()
        assert config.reference.commissioned_prefix == "MKR"
        assert config.export.output_path == "music_cue_sheet.csv"

    def test_invalid_edl_section_falls_back(self, tmp_path):
        config = load_config(write_config(tmp_path, "[edl]\nframe_rate = -5\n"))
        assert config.edl == EDLConfig()

    def test_malformed_toml_returns_defaults(self, tmp_path):
        config = load_config(write_config(tmp_path, "[edl\nframe_rate = "))
        assert config == Config()

    def test_missing_explicit_path_returns_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.toml")
        assert config == Config()
        assert not (tmp_path / "nope.toml").exists()

    def test_default_config_is_created(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module, "_find_project_config", lambda: None)

        config = load_config()

        created = tmp_path / "config" / "cuerator" / "config.toml"
        assert created.exists()
        assert created.read_text(encoding="utf-8") == create_default_config()
        assert config == Config()

    def test_working_directory_config(self, monkeypatch, tmp_path):
        monkeypatch.setattr(config_module, "_find_project_config", lambda: None)
        (tmp_path / "config.toml").write_text("[ai]\nenabled = false\n", encoding="utf-8")

        assert load_config().ai.enabled is False

    def test_default_template_parses_to_defaults(self, tmp_path):
        path = write_config(tmp_path, create_default_config())
        assert load_config(path) == Config()

    def test_api_key_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        path = write_config(tmp_path, "[ai]\nopenai_api_key = 'sk-file'\n")

        assert load_config(path).ai.openai_api_key == "sk-env"

    def test_api_key_from_file(self, tmp_path):
        path = write_config(tmp_path, "[ai]\nopenai_api_key = 'sk-file'\n")
        assert load_config(path).ai.openai_api_key == "sk-file"

    def test_log_file_is_expanded(self, tmp_path):
        path = write_config(tmp_path, "[logging]\nlog_file = '~/cuerator.log'\n")
        assert not load_config(path).logging.log_file.startswith("~")
