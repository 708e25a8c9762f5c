import os
import logging
import configparser
from typing import Dict, Optional
from pydantic import BaseModel, SecretStr
from snsclient.utils.errors.exceptions import MissingCredentialsError
from snsclient.utils.constants.constants import (
    ENV_VARS,
    PROFILE_KEYS,
    DEFAULT_PROFILE,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_REGION,
    DEFAULT_TIMEOUT,
    ENDPOINT_TEMPLATE
)

logger = logging.getLogger(__name__)


def mask_key(key_id):
    """Masks an access key id down to its last four characters."""
    if not key_id:
        return None
    return f"****{key_id[-4:]}"


class ConfigManager:
    """Reads named profiles from the shared credentials file."""
    def __init__(self, credentials_file=None):
        path = credentials_file or os.environ.get(ENV_VARS['credentials_file']) or DEFAULT_CREDENTIALS_FILE
        self.credentials_file = os.path.expanduser(path)
        self._profiles = {}

    def get_profile(self, profile_name, required=False) -> Dict[str, str]:
        """Retrieves a profile's values, caching the parsed section."""
        if profile_name not in self._profiles:
            parser = configparser.ConfigParser()
            try:
                read_files = parser.read(self.credentials_file)
            except configparser.Error as e:
                logger.error(f"Error parsing credentials file {self.credentials_file}: {str(e)}")
                if required:
                    raise MissingCredentialsError(f"Unreadable credentials file: {self.credentials_file}") from e
                return {}

            if not read_files or not parser.has_section(profile_name):
                if required:
                    raise MissingCredentialsError(
                        f"Profile '{profile_name}' not found in {self.credentials_file}"
                    )
                logger.info(f"No profile '{profile_name}' in {self.credentials_file}")
                return {}

            section = parser[profile_name]
            self._profiles[profile_name] = {
                field: section.get(key).strip()
                for field, key in PROFILE_KEYS.items()
                if section.get(key)
            }
            logger.info(f"Loaded profile '{profile_name}' from {self.credentials_file}")
        return self._profiles[profile_name]


class Config(BaseModel):
    """Resolved credentials and connection settings for one client."""

    access_key_id: str
    secret_access_key: SecretStr
    session_token: Optional[SecretStr] = None
    region: str = DEFAULT_REGION
    endpoint_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    profile: Optional[str] = None

    @property
    def endpoint(self) -> str:
        return self.endpoint_url or ENDPOINT_TEMPLATE.format(region=self.region)

    @classmethod
    def resolve(cls, access_key_id=None, secret_access_key=None, session_token=None,
                region=None, profile=None, credentials_file=None, endpoint_url=None,
                timeout=DEFAULT_TIMEOUT):
        """
        Resolves each setting from, in order:
        1. Explicit arguments
        2. Environment variables
        3. The named profile of the shared credentials file
        """
        profile_requested = profile is not None
        profile_name = profile or os.environ.get(ENV_VARS['profile']) or DEFAULT_PROFILE
        manager = ConfigManager(credentials_file)

        # Key id, secret and token travel together from the first complete source
        sources = [
            ('arguments', access_key_id, secret_access_key, session_token),
            ('environment',
             os.environ.get(ENV_VARS['access_key_id']),
             os.environ.get(ENV_VARS['secret_access_key']),
             os.environ.get(ENV_VARS['session_token']))
        ]
        for source, key_id, secret, token in sources:
            if key_id and secret:
                # The profile can still supply the region, but is no longer required
                profile_values = manager.get_profile(profile_name)
                break
        else:
            profile_values = manager.get_profile(profile_name, required=profile_requested)
            source = f"profile '{profile_name}'"
            key_id = profile_values.get('access_key_id')
            secret = profile_values.get('secret_access_key')
            token = profile_values.get('session_token')
            if not (key_id and secret):
                raise MissingCredentialsError(
                    "No AWS access key id / secret access key pair found in arguments, "
                    f"environment or profile '{profile_name}'"
                )

        region = (
            region
            or os.environ.get(ENV_VARS['region'])
            or os.environ.get(ENV_VARS['region_fallback'])
            or profile_values.get('region')
            or DEFAULT_REGION
        )

        logger.info(f"Resolved credentials {mask_key(key_id)} from {source} for region {region}")
        return cls(
            access_key_id=key_id,
            secret_access_key=secret,
            session_token=token or None,
            region=region,
            endpoint_url=endpoint_url,
            timeout=timeout,
            profile=profile_name
        )
