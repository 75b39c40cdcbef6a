"""Shared test configuration for the exchange adapter suite."""

import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv


@pytest.fixture(scope="session", autouse=True)
def setup_path() -> None:
    """Make ``src`` and ``tests`` importable and load local settings."""
    project_root = Path(__file__).parent.parent
    sys.path.insert(0, str(project_root))

    # EXCHANGE_* keys from a local .env; variables already set take precedence
    load_dotenv(project_root / ".env", override=False)


@pytest.fixture(autouse=True)
def no_real_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep keys from the environment out of adapters built with defaults."""
    for name in ("SOUTHXCHANGE", "STOCKSEXCHANGE", "TRADESATOSHI"):
        monkeypatch.delenv(f"EXCHANGE_{name}_API_KEY", raising=False)
        monkeypatch.delenv(f"EXCHANGE_{name}_API_SECRET", raising=False)
