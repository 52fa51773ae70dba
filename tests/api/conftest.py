"""
Configuration for real API integration tests.
"""

import os

import pytest

from gemini_marketing import create_orchestrator, resolve_config


@pytest.fixture
def real_orchestrator():
    """Orchestrator wired to the real Gemini endpoint."""
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key:
        pytest.skip("GEMINI_API_KEY required for API tests")
    return create_orchestrator(resolve_config({"use_real_api": True, "api_key": api_key}))
