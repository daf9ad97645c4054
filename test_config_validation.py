#!/usr/bin/env python3
"""
Tests for configuration loading and validation.
"""

import pytest
import yaml

from locimages.config import load_config, validate_config, apply_env_overrides


def write_config(tmp_path, data, name="config.yaml"):
    path = tmp_path / name
    path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return str(path)


def test_missing_file_gives_empty_apis(tmp_path):
    config = load_config(str(tmp_path / "absent.yaml"), environ={})

    assert config == {'apis': {}}


def test_yaml_values_are_loaded(tmp_path):
    path = write_config(tmp_path, {
        'apis': {'bing': {'api_key': 'from-file'}},
        'http_client': {'timeout': 10},
    })

    config = load_config(path, environ={})

    assert config['apis']['bing']['api_key'] == 'from-file'
    assert config['http_client']['timeout'] == 10


def test_environment_overrides_file(tmp_path):
    path = write_config(tmp_path, {'apis': {'bing': {'api_key': 'from-file'}}})

    config = load_config(path, environ={
        'BING_SEARCH_KEY': 'from-env',
        'GOOGLE_SEARCH_KEY': 'g',
        'GOOGLE_SEARCH_CX': 'cx',
        'FLICKR_API_KEY': '',
    })

    assert config['apis']['bing']['api_key'] == 'from-env'
    assert config['apis']['google'] == {'api_key': 'g', 'cx': 'cx'}
    assert 'flickr' not in config['apis']


def test_config_path_from_environment(tmp_path):
    path = write_config(tmp_path, {'apis': {'flickr': {'api_key': 'f'}}}, name="other.yaml")

    config = load_config(environ={'LOCIMAGES_CONFIG': path})

    assert config['apis']['flickr']['api_key'] == 'f'


def test_null_apis_section_is_tolerated():
    config = apply_env_overrides({'apis': None}, environ={'FLICKR_API_KEY': 'f'})

    assert config['apis'] == {'flickr': {'api_key': 'f'}}


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("apis: [unclosed", encoding="utf-8")

    with pytest.raises(yaml.YAMLError):
        load_config(str(path), environ={})


def test_valid_config_without_credentials_passes():
    validate_config({'apis': {}, 'http_client': {'timeout': 30}, 'logging': {'level': 'info'}})


@pytest.mark.parametrize("config", [
    {'http_client': {'timeout': 0}},
    {'http_client': {'timeout': 'soon'}},
    {'http_client': {'user_agents': 'single string'}},
    {'logging': {'level': 'LOUD'}},
])
def test_invalid_config_exits(config):
    with pytest.raises(SystemExit):
        validate_config(config)
