"""Client configuration loading."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

DEFAULT_MODEL = "text-davinci-003"
DEFAULT_TIMEOUT_S = 120
API_KEY_ENV = "OPENAI_API_KEY"


@dataclass(frozen=True)
class SamplingConfig:
    """Sampling parameters sent with every request."""

    model: str = DEFAULT_MODEL
    temperature: float = 0.9
    top_p: int = 1
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.6
    stop: tuple[str, ...] = ("\n",)


@dataclass
class ClientConfig:
    """Complete client configuration."""

    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    timeout_s: float = DEFAULT_TIMEOUT_S


_SAMPLING_TYPES = {
    "model": (str,),
    "temperature": (int, float),
    "top_p": (int,),
    "frequency_penalty": (int, float),
    "presence_penalty": (int, float),
    "stop": (list,),
}


def _parse_sampling(data: dict[str, Any]) -> SamplingConfig:
    known = {f.name for f in fields(SamplingConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown sampling keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, value in data.items():
        allowed = _SAMPLING_TYPES[key]
        if isinstance(value, bool) or not isinstance(value, allowed):
            raise ValueError(f"Sampling key '{key}' has invalid value {value!r}")
        if key == "stop":
            if not all(isinstance(s, str) for s in value):
                raise ValueError("Sampling key 'stop' must be a list of strings")
            value = tuple(value)
        elif key in ("temperature", "frequency_penalty", "presence_penalty"):
            value = float(value)
        values[key] = value

    return SamplingConfig(**values)


def load_config(path: str | Path) -> ClientConfig:
    """Load client configuration from a YAML file.

    Expected layout::

        davinci:
          timeout_s: 30
          sampling:
            temperature: 0.7

    Args:
        path: Path to YAML configuration file

    Returns:
        Client configuration with unspecified values left at their defaults

    Raises:
        FileNotFoundError: If config file not found
        ValueError: If configuration is invalid
        yaml.YAMLError: If YAML is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not data or "davinci" not in data:
        raise ValueError("Configuration file missing 'davinci' section")

    section = data["davinci"] or {}
    if not isinstance(section, dict):
        raise ValueError("'davinci' section must be a mapping")

    sampling_data = section.get("sampling") or {}
    if not isinstance(sampling_data, dict):
        raise ValueError("'sampling' section must be a mapping")

    timeout_s = section.get("timeout_s", DEFAULT_TIMEOUT_S)
    if isinstance(timeout_s, bool) or not isinstance(timeout_s, (int, float)) or timeout_s <= 0:
        raise ValueError(f"timeout_s must be a positive number, got {timeout_s!r}")

    return ClientConfig(sampling=_parse_sampling(sampling_data), timeout_s=float(timeout_s))


def load_api_key(env_var: str = API_KEY_ENV) -> str:
    """Read the API key from the environment, loading a local .env first.

    Raises:
        ValueError: If the variable is unset or empty
    """
    load_dotenv()
    key = os.getenv(env_var)
    if not key:
        raise ValueError(f"Missing environment variable: {env_var}")
    return key
