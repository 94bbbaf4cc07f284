"""
NanoCamo - Configuration Tests
================================
Unit tests for pydantic-settings configuration.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from nano_camo.camo.version import CamoVersions
from nano_camo.config import (
    CamoSettings,
    get_settings,
    override_settings,
    reload_settings,
    validate_config,
)


class TestDefaults:
    """Test default values"""

    def test_defaults(self):
        """Test defaults"""
        config = override_settings()
        assert config.log_level == "WARNING"
        assert config.supported_versions == [1]
        assert config.default_address_versions == [1]
        assert config.notification_amount_raw == 1
        assert config.scan_max_index == 1000

    def test_local_versions(self):
        """Test version set helpers"""
        config = override_settings(supported_versions=[1, 3])
        assert config.local_versions() == CamoVersions.from_byte(0x05)
        assert config.address_versions() == CamoVersions.from_byte(0x01)

    def test_singleton(self):
        """Test get_settings caching"""
        assert get_settings() is get_settings()


class TestEnvironment:
    """Test environment overrides"""

    def test_env_override(self, monkeypatch):
        """Test NANOCAMO_ prefix"""
        monkeypatch.setenv("NANOCAMO_LOG_LEVEL", "debug")
        monkeypatch.setenv("NANOCAMO_SCAN_MAX_INDEX", "42")

        config = reload_settings()

        assert config.log_level == "DEBUG"
        assert config.scan_max_index == 42

    def test_env_versions_json(self, monkeypatch):
        """Test list values as JSON"""
        monkeypatch.setenv("NANOCAMO_SUPPORTED_VERSIONS", "[3, 1, 1]")
        assert reload_settings().supported_versions == [1, 3]


class TestValidation:
    """Test field validators"""

    def test_invalid_log_level(self):
        """Test unknown log level"""
        with pytest.raises(PydanticValidationError):
            CamoSettings(log_level="LOUD")

    def test_invalid_log_format(self):
        """Test unknown log format"""
        with pytest.raises(PydanticValidationError):
            CamoSettings(log_format="xml")

    @pytest.mark.parametrize("versions", [[0], [9], [1, 12]])
    def test_invalid_versions(self, versions):
        """Test versions outside 1-8"""
        with pytest.raises(PydanticValidationError):
            CamoSettings(supported_versions=versions)

    def test_notification_amount_positive(self):
        """Test ge=1"""
        with pytest.raises(PydanticValidationError):
            CamoSettings(notification_amount_raw=0)

    def test_versions_sorted(self):
        """Test sort and dedupe"""
        assert CamoSettings(supported_versions=[5, 1, 5]).supported_versions == [1, 5]

    def test_json_round_trip(self):
        """Test to_json / from_json"""
        config = override_settings(scan_max_index=7)
        assert CamoSettings.from_json(config.to_json()).scan_max_index == 7


class TestValidateConfig:
    """Test consistency checks"""

    def test_valid(self):
        """Test default config"""
        ok, errors = validate_config(override_settings())
        assert ok
        assert errors == []

    def test_empty_supported(self):
        """Test no local versions"""
        ok, errors = validate_config(override_settings(supported_versions=[]))
        assert not ok
        assert any("supported_versions" in e for e in errors)

    def test_unimplemented_address_versions(self):
        """Test address versions without v1"""
        ok, errors = validate_config(override_settings(default_address_versions=[2]))
        assert not ok
        assert any("default_address_versions" in e for e in errors)
