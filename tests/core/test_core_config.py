"""
tests/core/test_core_config.py - core/config.py 테스트
"""

import pytest

from core.config import (
    Settings,
    get_default_profile,
    get_default_region,
    get_env_bool,
    get_env_int,
    get_max_concurrency,
    get_version,
    settings,
)


class TestSettings:
    """Settings 기본값 테스트"""

    def test_defaults(self):
        assert settings.DEFAULT_REGION == "ap-northeast-1"
        assert settings.GLOBAL_SERVICE_REGION == "us-east-1"
        assert settings.DEFAULT_MAX_CONCURRENCY == 5
        assert settings.COMBINED_CSV_NAME == "all.csv"
        assert settings.RESOURCES_DIR_NAME == "resources"

    def test_frozen(self):
        """불변 설정"""
        with pytest.raises(Exception):
            settings.DEFAULT_REGION = "us-west-2"  # type: ignore[misc]

    def test_new_instance_same_values(self):
        assert Settings() == settings


class TestEnvHelpers:
    """환경변수 헬퍼 테스트"""

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("INVC_TEST_INT", " 7 ")
        assert get_env_int("INVC_TEST_INT", 1) == 7

    def test_env_int_invalid_returns_default(self, monkeypatch):
        monkeypatch.setenv("INVC_TEST_INT", "seven")
        assert get_env_int("INVC_TEST_INT", 3) == 3

    def test_env_int_missing(self, monkeypatch):
        monkeypatch.delenv("INVC_TEST_INT", raising=False)
        assert get_env_int("INVC_TEST_INT", 9) == 9

    @pytest.mark.parametrize("raw", ["true", "1", "YES", "On"])
    def test_env_bool_true(self, monkeypatch, raw):
        monkeypatch.setenv("INVC_TEST_BOOL", raw)
        assert get_env_bool("INVC_TEST_BOOL") is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", "OFF"])
    def test_env_bool_false(self, monkeypatch, raw):
        monkeypatch.setenv("INVC_TEST_BOOL", raw)
        assert get_env_bool("INVC_TEST_BOOL", default=True) is False

    def test_env_bool_unknown_returns_default(self, monkeypatch):
        monkeypatch.setenv("INVC_TEST_BOOL", "maybe")
        assert get_env_bool("INVC_TEST_BOOL", default=True) is True


class TestDefaults:
    """기본 리전/프로파일/동시성"""

    def test_default_region_from_env(self, monkeypatch):
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        assert get_default_region() == "eu-west-1"

    def test_default_region_fallback(self, monkeypatch):
        monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
        monkeypatch.delenv("AWS_REGION", raising=False)
        assert get_default_region() == "ap-northeast-1"

    def test_default_profile(self, monkeypatch):
        assert get_default_profile() is None
        monkeypatch.setenv("AWS_PROFILE", "dev")
        assert get_default_profile() == "dev"

    def test_max_concurrency(self, monkeypatch):
        assert get_max_concurrency() == 5
        monkeypatch.setenv("INVC_MAX_CONCURRENCY", "12")
        assert get_max_concurrency() == 12

    def test_version_is_string(self):
        assert isinstance(get_version(), str)
        assert get_version()
