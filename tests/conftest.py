"""Pytest configuration for davinci client tests."""
import sys
from pathlib import Path

import pytest

# Add project root to path so the 'davinci' package can be imported
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def completion_body():
    """Well-formed completion response body."""
    return {
        "id": "1",
        "object": "text_completion",
        "created": 0,
        "model": "text-davinci-003",
        "choices": [
            {"text": " 4", "index": 0, "logprobs": None, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }
