"""
Configuration management for the locimages package.

Settings come from a YAML file; provider credentials can also be supplied
through environment variables, which take precedence.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml

from .utils.logger import get_logger

DEFAULT_CONFIG_PATH = "config.yaml"
CONFIG_PATH_ENV = "LOCIMAGES_CONFIG"

# environment variable -> (provider, key)
ENV_CREDENTIALS = {
    'GOOGLE_SEARCH_KEY': ('google', 'api_key'),
    'GOOGLE_SEARCH_CX': ('google', 'cx'),
    'BING_SEARCH_KEY': ('bing', 'api_key'),
    'FLICKR_API_KEY': ('flickr', 'api_key'),
    'UNSPLASH_ACCESS_KEY': ('unsplash', 'access_key'),
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def read_config_file(config_path: str) -> Dict[str, Any]:
    """
    Read a YAML configuration file.

    A missing file yields an empty configuration.

    Raises:
        yaml.YAMLError: If the YAML file is malformed
    """
    config_file = Path(config_path)

    if not config_file.exists():
        return {}

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error parsing YAML file {config_path}: {e}")


def apply_env_overrides(config: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Copy provider credentials found in the environment into ``config['apis']``."""
    environ = os.environ if environ is None else environ
    apis = config.setdefault('apis', {}) or {}
    config['apis'] = apis

    for env_name, (provider, key) in ENV_CREDENTIALS.items():
        value = environ.get(env_name)
        if value:
            section = apis.get(provider) or {}
            section[key] = value
            apis[provider] = section

    return config


def load_config(config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML and the environment.

    Args:
        config_path: Path to the configuration file; defaults to
            ``$LOCIMAGES_CONFIG`` or ``config.yaml``
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Dictionary containing configuration data
    """
    environ = os.environ if environ is None else environ
    config_path = config_path or environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH

    config = read_config_file(config_path)
    return apply_env_overrides(config, environ)


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration and exit with error if validation fails.

    Missing credentials are not errors: the affected sources run on demo data
    and a warning is logged for each.

    Raises:
        SystemExit: If validation fails
    """
    logger = get_logger("locimages.config")
    errors: List[str] = []
    apis = config.get('apis') or {}

    # 1. Credentials
    google = apis.get('google') or {}
    if not (google.get('api_key') and google.get('cx')):
        logger.warning("Google api_key/cx not configured - google will return demo results")
    if not (apis.get('bing') or {}).get('api_key'):
        logger.warning("Bing api_key not configured - bing will return demo results")
    if not (apis.get('flickr') or {}).get('api_key'):
        logger.warning("Flickr api_key not configured - flickr will return demo results")

    # 2. HTTP timeout
    timeout = (config.get('http_client') or {}).get('timeout', 30)
    try:
        if float(timeout) <= 0:
            errors.append("http_client.timeout must be a positive number")
    except (ValueError, TypeError):
        errors.append("http_client.timeout must be a valid number")

    # 3. User agents
    user_agents = (config.get('http_client') or {}).get('user_agents')
    if user_agents is not None and not isinstance(user_agents, list):
        errors.append("http_client.user_agents must be a list of strings")

    # 4. Logging level
    level = (config.get('logging') or {}).get('level', 'INFO')
    if str(level).upper() not in LOG_LEVELS:
        errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}")

    if errors:
        logger.error("Config validation failed:")
        for error in errors:
            logger.error(f"  - {error}")
        logger.error("Please fix the configuration and try again.")
        sys.exit(1)

    logger.info("Configuration validation passed successfully")
