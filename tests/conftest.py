"""
pytest conftest: shared fixtures for unit tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from validated_string.registry import reset_registry
from validated_string.settings import get_settings


@pytest.fixture(autouse=True)
def fresh_state():
    """Each test sees settings from its own environment and a clean registry."""
    get_settings.cache_clear()
    reset_registry()
    yield
    get_settings.cache_clear()
    reset_registry()


@pytest.fixture
def policy_yaml(tmp_path):
    """Write a policy file and return its path."""
    def _write(text: str) -> str:
        path = tmp_path / "policies.yaml"
        path.write_text(text)
        return str(path)
    return _write


@pytest.fixture
def accounts_model():
    from typing import Optional
    from pydantic import BaseModel
    from validated_string.policies import AppVersion, Email

    class Account(BaseModel):
        email: Email
        client_version: Optional[AppVersion] = None

    return Account
