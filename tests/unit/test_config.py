"""
Unit tests for configuration loading and the CLI config keys.
"""

import json

import pytest

from mikanfeed.core.config import AppConfig, HttpConfig, MikanConfig
from mikanfeed.core.exceptions import ConfigError, ConfigValidationError


class TestMikanConfig:
    """Tests for MikanConfig validation."""

    def test_defaults(self):
        config = MikanConfig()

        assert config.base == 'https://mikanime.tv'
        assert config.image_base == 'https://mikanani.me'
        assert config.image_proxy is None
        assert config.include == []
        assert config.exclude == []
        assert config.collect_all_links is False

    def test_trailing_slash_is_stripped(self):
        assert MikanConfig(base='https://mikanani.me/').base == 'https://mikanani.me'

    def test_empty_base_is_rejected(self):
        with pytest.raises(ValueError):
            MikanConfig(base='')

    def test_blank_proxy_is_none(self):
        assert MikanConfig(image_proxy='  ').image_proxy is None

    def test_newline_separated_keywords(self):
        config = MikanConfig(exclude='繁日内嵌\n简日内嵌\n')
        assert config.exclude == ['繁日内嵌', '简日内嵌']


class TestHttpConfig:
    """Tests for HttpConfig proxy resolution."""

    def test_configured_proxy_wins(self, monkeypatch):
        monkeypatch.setenv('HTTP_PROXY', 'http://env-proxy:8080')
        config = HttpConfig(proxy='http://127.0.0.1:7890')
        assert config.get_proxy() == 'http://127.0.0.1:7890'

    def test_env_proxy_fallback(self, monkeypatch):
        monkeypatch.setenv('HTTP_PROXY', 'http://env-proxy:8080')
        assert HttpConfig().get_proxy() == 'http://env-proxy:8080'

    def test_timeout_bounds(self):
        with pytest.raises(ValueError):
            HttpConfig(timeout=0)


class TestAppConfigValues:
    """Tests for get/set/unset through CLI key names."""

    @pytest.fixture
    def config(self):
        return AppConfig()

    def test_get_value(self, config):
        assert config.get_value('base') == 'https://mikanime.tv'
        assert config.get_value('image-proxy') is None

    def test_set_scalar_uses_first_arg(self, config):
        result = config.set_value('image-proxy', ['https://proxy.example/img', 'ignored'])

        assert result == 'https://proxy.example/img'
        assert config.mikan.image_proxy == 'https://proxy.example/img'

    def test_set_list_uses_all_args(self, config):
        result = config.set_value('include', ['1080p', '简体'])

        assert result == ['1080p', '简体']
        assert config.mikan.include == ['1080p', '简体']

    def test_set_empty_base_is_rejected(self, config):
        with pytest.raises(ConfigValidationError):
            config.set_value('base', [''])
        assert config.mikan.base == 'https://mikanime.tv'

    def test_set_without_args(self, config):
        with pytest.raises(ConfigValidationError):
            config.set_value('base', [])

    def test_unknown_key(self, config):
        with pytest.raises(ConfigValidationError) as exc_info:
            config.get_value('image_proxy')
        assert 'No config named' in exc_info.value.message

    def test_unset_restores_default(self, config):
        config.set_value('base', ['https://mikanani.me'])
        config.set_value('exclude', ['CR'])

        assert config.unset_value('base') == 'https://mikanime.tv'
        assert config.unset_value('exclude') == []


class TestAppConfigLoad:
    """Tests for AppConfig.load() and save()."""

    def test_load_from_file(self, app_config):
        assert app_config.mikan.exclude == ['繁日内嵌']
        assert app_config.http.timeout == 10
        assert app_config.poll.max_workers == 2
        assert len(app_config.subscriptions) == 1
        assert app_config.subscriptions[0].id == '3141'

    def test_missing_file_creates_defaults(self, tmp_path):
        config_path = tmp_path / 'new_config.json'

        config = AppConfig.load(str(config_path))

        assert config_path.exists()
        assert config.mikan.base == 'https://mikanime.tv'

    def test_save_roundtrip(self, tmp_path):
        config_path = tmp_path / 'config.json'
        config = AppConfig()
        config.set_value('image-proxy', ['https://proxy.example/img'])
        config.save(str(config_path))

        reloaded = AppConfig.load(str(config_path))

        assert reloaded.mikan.image_proxy == 'https://proxy.example/img'

    def test_invalid_json(self, tmp_path):
        config_path = tmp_path / 'broken.json'
        config_path.write_text('{not json', encoding='utf-8')

        with pytest.raises(ConfigError):
            AppConfig.load(str(config_path))

    def test_invalid_value(self, tmp_path):
        config_path = tmp_path / 'invalid.json'
        config_path.write_text(json.dumps({'mikan': {'base': ''}}), encoding='utf-8')

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load(str(config_path))
        assert exc_info.value.code == 'CONFIG_VALIDATION_ERROR'
