"""Credential configuration: YAML profiles and the boto3 credential chain."""
import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError
import yaml

from .exceptions import ConfigurationError
from .models import Credentials

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = '.config.yaml'


def load_config(config_file: str = DEFAULT_CONFIG_FILE) -> dict:
    """Load the full profile mapping from the YAML file."""
    try:
        with open(config_file, 'r') as f:
            full_config = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_file}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}")

    if not isinstance(full_config, dict):
        raise ConfigurationError(f"{config_file} must contain a mapping of profiles")
    return full_config


def load_profile(profile: str, config_file: str = DEFAULT_CONFIG_FILE) -> Credentials:
    """Load the credentials for a specific profile from the YAML file."""
    full_config = load_config(config_file)
    if profile not in full_config:
        raise ConfigurationError(f"Profile '{profile}' not found in {config_file}")

    conf = full_config[profile] or {}
    for key in ('access_key', 'secret_key'):
        if not conf.get(key):
            raise ConfigurationError(f"Missing '{key}' in config for profile '{profile}'")

    logger.debug("Loaded profile %s from %s", profile, config_file)
    return Credentials(
        access_key_id=str(conf['access_key']),
        secret_access_key=str(conf['secret_key']),
        region=conf.get('region'),
    )


def credentials_from_boto3(profile_name: Optional[str] = None, region: Optional[str] = None) -> Credentials:
    """Resolve credentials through boto3's chain (env vars, shared files, ...).

    Only local configuration is read; nothing is sent to AWS.
    """
    try:
        session = boto3.Session(profile_name=profile_name)
    except BotoCoreError as e:
        raise ConfigurationError(f"Cannot open AWS profile {profile_name!r}: {e}")

    creds = session.get_credentials()
    if creds is None:
        raise ConfigurationError("No AWS credentials found by boto3")

    frozen = creds.get_frozen_credentials()
    return Credentials(
        access_key_id=frozen.access_key,
        secret_access_key=frozen.secret_key,
        region=region or session.region_name,
    )
