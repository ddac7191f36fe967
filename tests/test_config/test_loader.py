"""YAML 配置加载测试"""

import string

import pytest
import yaml

from ytagging.config import AppSettings, TaggingSettings, load_yaml_config
from ytagging.orm.taggable import TaggingConfig


class TestLoadYamlConfig:

    def test_load_app_settings(self, sample_yaml_config):
        settings = load_yaml_config(sample_yaml_config, AppSettings)

        assert settings.database.url == "sqlite:///tags.db"
        assert settings.database.pool_size == 3
        assert settings.logging.sql_log_enabled is True
        assert settings.tagging.popular_limit == 5
        assert settings.tagging.displayer is string.capwords

        config = TaggingConfig.from_settings(settings.tagging)
        assert config.delimiter == ","

    def test_section(self, sample_yaml_config):
        """只读取 tagging 段构造 TaggingSettings"""
        settings = load_yaml_config(sample_yaml_config, TaggingSettings, section="tagging")
        assert settings.delimiter == ","
        assert settings.search_limit == 20

    def test_missing_section_uses_defaults(self, sample_yaml_config):
        settings = load_yaml_config(sample_yaml_config, TaggingSettings, section="nothing")
        assert settings.delimiter is None

    def test_overrides(self, sample_yaml_config):
        settings = load_yaml_config(sample_yaml_config, AppSettings, tagging={"delimiter": ";"})
        assert settings.tagging.delimiter == ";"
        assert settings.database.url == "sqlite:///tags.db"

        again = load_yaml_config(sample_yaml_config, AppSettings)
        assert again.tagging.delimiter == ","

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(f"{temp_dir}/not-exists.yaml", AppSettings)

    def test_empty_file(self, temp_file):
        path = temp_file("empty.yaml", "")
        settings = load_yaml_config(path, AppSettings)
        assert settings.tagging.popular_limit == 10

    def test_invalid_yaml(self, temp_file):
        path = temp_file("broken.yaml", "tagging: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml_config(path, AppSettings)
