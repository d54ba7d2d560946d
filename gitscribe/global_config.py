"""Configuration loading for gitscribe.

Reads user configuration from YAML; never writes it:
- ~/.config/gitscribe/config.yaml: provider, model, endpoint and ignore settings
- ~/.config/gitscribe/credentials: API keys for providers (KEY=value lines)
- <repo>/.git/gitscribe.yaml: repository-local configuration (--local)

API keys are resolved from the config file, then the provider's
environment variable (a .env file is honoured), then the credentials file.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from gitscribe.config import (
    API_KEY_ENV_VARS,
    DEFAULT_PROVIDER,
    ClientConfig,
    LLMProvider,
)
from gitscribe.git.filtering import DEFAULT_FILE_IGNORE
from gitscribe.llm.exceptions import MissingAPIKeyError


class ConfigError(Exception):
    """Raised when there's an error with the configuration."""
    pass


_CONFIG_DIR = Path.home() / ".config" / "gitscribe"

LOCAL_CONFIG_NAME = "gitscribe.yaml"


@dataclass
class Settings:
    """Everything one workflow run needs from configuration.

    Attributes:
        client: Completion client settings.
        file_ignore: Glob patterns for staged files to leave out of the diff.
        verbose: Enable debug logging.
    """

    client: ClientConfig
    file_ignore: list[str] = field(default_factory=list)
    verbose: bool = False


def get_global_config_dir() -> Path:
    """Get the global gitscribe configuration directory.

    Returns:
        Path to ~/.config/gitscribe/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to the global config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to the credentials file."""
    return get_global_config_dir() / "credentials"


def get_local_config_path(repo_root: Path) -> Path:
    """Get path to the repository-local config file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to <repo>/.git/gitscribe.yaml
    """
    return repo_root / ".git" / LOCAL_CONFIG_NAME


def load_config_file(config_file: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_file: Path to the YAML file.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file {config_file} must contain a YAML mapping")
    return config


def load_credentials() -> Dict[str, str]:
    """Load API keys from the credentials file.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    credentials = {}

    try:
        with open(credentials_file, "r") as f:
            for line in f:
                line = line.strip()
                # Skip empty lines and comments
                if not line or line.startswith("#"):
                    continue

                # Parse KEY=value format
                if "=" in line:
                    key, value = line.split("=", 1)
                    credentials[key.strip()] = value.strip()
    except OSError as e:
        raise ConfigError(f"Failed to load credentials from {credentials_file}: {e}")

    return credentials


def get_provider(config: Dict[str, Any]) -> LLMProvider:
    """Get the configured provider.

    Raises:
        ConfigError: If the provider name is unknown.
    """
    provider_str = config.get("provider")
    if not provider_str:
        return DEFAULT_PROVIDER

    try:
        return LLMProvider(str(provider_str).lower())
    except ValueError:
        valid = ", ".join(p.value for p in LLMProvider)
        raise ConfigError(f"Unknown provider: {provider_str} (valid providers: {valid})")


def resolve_api_key(provider: LLMProvider, config: Dict[str, Any]) -> str:
    """Find the API key for `provider`.

    Checks in order:
    1. `api_key` in the config file
    2. The provider's environment variable
    3. The credentials file

    Raises:
        MissingAPIKeyError: If the API key is not found.
    """
    api_key = config.get("api_key")
    if api_key:
        return str(api_key)

    env_var_name = API_KEY_ENV_VARS[provider]
    api_key = os.getenv(env_var_name)
    if api_key:
        return api_key

    api_key = load_credentials().get(env_var_name)
    if api_key:
        return api_key

    raise MissingAPIKeyError(
        f"API key for provider '{provider.value}' not found. Set it using:\n"
        f"  1. Environment variable: export {env_var_name}=your_key_here\n"
        f"  2. 'api_key' in {get_config_file_path()}\n"
        f"  3. {env_var_name}=your_key_here in {get_credentials_file_path()}"
    )


def parse_extra_headers(value: Any) -> Dict[str, str]:
    """Normalize the `extra_headers` setting.

    Accepts a YAML mapping or a JSON object string.

    Raises:
        ConfigError: If the value is neither.
    """
    if value is None or value == "":
        return {}

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ConfigError(f"extra_headers is not a valid JSON object: {e}")

    if not isinstance(value, dict):
        raise ConfigError("extra_headers must be a mapping of header names to values")

    return {str(k): str(v) for k, v in value.items()}


def get_ignore_patterns(config: Dict[str, Any]) -> list[str]:
    """Get the configured ignore patterns.

    Raises:
        ConfigError: If `file_ignore` is not a list.
    """
    patterns = config.get("file_ignore")
    if patterns is None:
        return list(DEFAULT_FILE_IGNORE)
    if not isinstance(patterns, list):
        raise ConfigError("file_ignore must be a list of glob patterns")
    return [str(p) for p in patterns]


def build_client_config(config: Dict[str, Any]) -> ClientConfig:
    """Build the immutable client settings from a config dictionary.

    Raises:
        ConfigError: If a value is invalid.
        MissingAPIKeyError: If no API key is available.
    """
    provider = get_provider(config)
    api_key = resolve_api_key(provider, config)

    values = {
        "provider": provider,
        "api_key": api_key,
        "extra_headers": parse_extra_headers(config.get("extra_headers")),
    }
    for key in ("api_base", "model", "timeout", "retries", "retry_delay", "proxy", "temperature", "debug"):
        if config.get(key) is not None:
            values[key] = config[key]

    try:
        client = ClientConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}")

    try:
        client.resolved_api_base()
    except ValueError as e:
        raise ConfigError(str(e))
    return client


def load_settings(
    config_path: Optional[Path] = None,
    repo_root: Optional[Path] = None,
    local: bool = False,
) -> Settings:
    """Load the settings for one workflow run.

    Args:
        config_path: Explicit config file; overrides the other locations.
        repo_root: Repository root, needed for `local`.
        local: Use <repo>/.git/gitscribe.yaml instead of the global file.

    Returns:
        The resolved settings.

    Raises:
        ConfigError: If the configuration is invalid.
        MissingAPIKeyError: If no API key is available.
    """
    load_dotenv()

    if config_path is None:
        if local:
            if repo_root is None:
                raise ConfigError("Local configuration requires a repository")
            config_path = get_local_config_path(repo_root)
        else:
            config_path = get_config_file_path()
    elif not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    config = load_config_file(config_path)
    client = build_client_config(config)

    return Settings(
        client=client,
        file_ignore=get_ignore_patterns(config),
        verbose=bool(config.get("verbose", False)) or client.debug,
    )
