"""Tests for client configuration loading."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from davinci.config import (
    DEFAULT_TIMEOUT_S,
    ClientConfig,
    SamplingConfig,
    load_api_key,
    load_config,
)


def create_test_config(content) -> Path:
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(content, f)
        return Path(f.name)


def test_defaults():
    config = ClientConfig()

    assert config.timeout_s == DEFAULT_TIMEOUT_S
    assert config.sampling == SamplingConfig(
        model="text-davinci-003",
        temperature=0.9,
        top_p=1,
        frequency_penalty=0.0,
        presence_penalty=0.6,
        stop=("\n",),
    )


def test_load_valid_config():
    config_path = create_test_config(
        {
            "davinci": {
                "timeout_s": 30,
                "sampling": {
                    "temperature": 0.5,
                    "presence_penalty": 1,
                    "stop": ["\n", "H:"],
                },
            }
        }
    )

    try:
        config = load_config(config_path)
        assert config.timeout_s == 30.0
        assert config.sampling.temperature == 0.5
        assert config.sampling.presence_penalty == 1.0
        assert config.sampling.stop == ("\n", "H:")
        # Untouched keys keep their defaults
        assert config.sampling.model == "text-davinci-003"
        assert config.sampling.top_p == 1
    finally:
        config_path.unlink()


def test_load_empty_section_uses_defaults():
    config_path = create_test_config({"davinci": None})

    try:
        assert load_config(config_path) == ClientConfig()
    finally:
        config_path.unlink()


def test_load_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/path.yaml")


def test_load_missing_section():
    config_path = create_test_config({"other": "data"})

    try:
        with pytest.raises(ValueError, match="missing 'davinci' section"):
            load_config(config_path)
    finally:
        config_path.unlink()


def test_unknown_sampling_key():
    config_path = create_test_config({"davinci": {"sampling": {"top_k": 40}}})

    try:
        with pytest.raises(ValueError, match="Unknown sampling keys: top_k"):
            load_config(config_path)
    finally:
        config_path.unlink()


@pytest.mark.parametrize(
    "sampling",
    [
        {"temperature": "hot"},
        {"top_p": 0.5},
        {"top_p": True},
        {"stop": "\n"},
        {"stop": ["\n", 3]},
    ],
)
def test_invalid_sampling_values(sampling):
    config_path = create_test_config({"davinci": {"sampling": sampling}})

    try:
        with pytest.raises(ValueError, match="'(temperature|top_p|stop)'"):
            load_config(config_path)
    finally:
        config_path.unlink()


@pytest.mark.parametrize("timeout", [0, -1, "soon"])
def test_invalid_timeout(timeout):
    config_path = create_test_config({"davinci": {"timeout_s": timeout}})

    try:
        with pytest.raises(ValueError, match="timeout_s must be a positive number"):
            load_config(config_path)
    finally:
        config_path.unlink()


@patch("davinci.config.load_dotenv")
@patch.dict("os.environ", {"OPENAI_API_KEY": "sk-env"})
def test_load_api_key(mock_load_dotenv):
    assert load_api_key() == "sk-env"
    assert mock_load_dotenv.called


@patch("davinci.config.load_dotenv")
@patch.dict("os.environ", {"CUSTOM_KEY": "sk-custom"}, clear=True)
def test_load_api_key_custom_var(mock_load_dotenv):
    assert load_api_key("CUSTOM_KEY") == "sk-custom"


@patch("davinci.config.load_dotenv")
@patch.dict("os.environ", {}, clear=True)
def test_load_api_key_missing(mock_load_dotenv):
    with pytest.raises(ValueError, match="Missing environment variable: OPENAI_API_KEY"):
        load_api_key()
