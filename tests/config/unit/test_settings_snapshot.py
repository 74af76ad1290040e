"""Unit tests for application settings loading."""

import pytest

from fixtures.configs import write_settings_yaml
from infrastructure.config.exceptions import SettingsError
from infrastructure.config.settings import (
    REFERENCE_SETTINGS_PATH,
    SettingsSnapshot,
    load_settings,
    merge_settings,
)


class TestSettingsSnapshot:
    """Test dotted-path access."""

    def test_has_path_nested(self):
        """Test has_path for nested keys with dashes."""
        settings = SettingsSnapshot({"model": {"local-computation": True}})

        assert settings.has_path("model.local-computation")
        assert settings.has_path("model")
        assert not settings.has_path("model.local")
        assert not settings.has_path("model.local-computation.extra")

    def test_null_value_is_absent(self):
        """Test that None values are treated as missing."""
        settings = SettingsSnapshot({"model": {"local": None}})

        assert not settings.has_path("model.local")
        assert settings.get("model.local", "default") == "default"

    @pytest.mark.parametrize(
        "raw,expected",
        [(True, True), (False, False), ("true", True), ("Yes", True), ("off", False), (" FALSE ", False)],
    )
    def test_get_bool_accepted_values(self, raw, expected):
        """Test boolean coercion for accepted values."""
        settings = SettingsSnapshot({"flag": raw})

        assert settings.get_bool("flag") is expected

    def test_get_bool_missing_raises(self):
        """Test that a missing boolean raises SettingsError."""
        with pytest.raises(SettingsError, match="No configuration setting found"):
            SettingsSnapshot({}).get_bool("model.local")

    def test_get_bool_invalid_raises(self):
        """Test that non-boolean values raise SettingsError."""
        with pytest.raises(SettingsError, match="rather than boolean"):
            SettingsSnapshot({"flag": 1}).get_bool("flag")

    def test_snapshot_is_read_only_copy(self):
        """Test that the snapshot is isolated from the source and from callers."""
        source = {"model": {"local-computation": True}}
        settings = SettingsSnapshot(source)
        source["model"]["local-computation"] = False
        settings.get("model")["local-computation"] = False

        assert settings.get_bool("model.local-computation") is True


class TestMergeSettings:
    """Test deep merging of settings."""

    def test_nested_merge(self):
        """Test that nested mappings merge and overrides win."""
        base = {"model": {"local-computation": False, "other": 1}}
        merged = merge_settings(base, {"model": {"local-computation": True}})

        assert merged == {"model": {"local-computation": True, "other": 1}}
        assert base["model"]["local-computation"] is False


class TestLoadSettings:
    """Test loading packaged defaults and overrides."""

    def test_reference_defaults(self):
        """Test that packaged defaults select cluster computation."""
        assert REFERENCE_SETTINGS_PATH.exists()

        settings = load_settings(environ={})

        assert settings.get_bool("model.local-computation") is False

    def test_override_from_argument(self, tmp_path):
        """Test that an explicit override file is applied."""
        override = write_settings_yaml(tmp_path / "app.yaml", {"model": {"local-computation": True}})

        settings = load_settings(override, environ={})

        assert settings.get_bool("model.local-computation") is True

    def test_override_from_environment(self, tmp_path):
        """Test that CLUSTER_CONFIG_SETTINGS names the override file."""
        override = write_settings_yaml(tmp_path / "app.yaml", {"model": {"local-computation": True}})

        settings = load_settings(environ={"CLUSTER_CONFIG_SETTINGS": str(override)})

        assert settings.get_bool("model.local-computation") is True

    def test_deprecated_override_drops_default(self, tmp_path):
        """Test that an override using only model.local is not masked by the default."""
        override = write_settings_yaml(tmp_path / "app.yaml", {"model": {"local": True}})

        settings = load_settings(override, environ={})

        assert not settings.has_path("model.local-computation")
        assert settings.get_bool("model.local") is True

    def test_missing_override_raises(self, tmp_path):
        """Test that a missing override file raises SettingsError."""
        with pytest.raises(SettingsError, match="not found"):
            load_settings(tmp_path / "absent.yaml", environ={})

    def test_invalid_override_raises(self, tmp_path):
        """Test that unparseable YAML raises SettingsError."""
        override = tmp_path / "bad.yaml"
        override.write_text("model: [unclosed", encoding="utf-8")

        with pytest.raises(SettingsError, match="Unable to read"):
            load_settings(override, environ={})
