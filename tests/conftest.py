"""
Shared pytest configuration.

This file ensures the project root is on sys.path so that `import agentgate`
works consistently in all tests.
"""

import sys
from pathlib import Path

import pytest


# Ensure project root is importable for test modules.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from agentgate.settings import settings  # noqa: E402


@pytest.fixture(autouse=True)
def _no_delays(monkeypatch):
    """
    Collapse the quiet periods so completion tests run instantly.
    """
    monkeypatch.setattr(settings, "quiescence_delay", 0)
    monkeypatch.setattr(settings, "workspace_delay", 0)
    for name in ("openai_api_key", "anthropic_api_key", "gemini_api_key", "github_token"):
        monkeypatch.setattr(settings, name, None)
