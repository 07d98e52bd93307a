"""Test harness configuration.

The bot is a flat set of top-level modules. Make sure tests import the
in-repo modules even when the project is not installed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = str(Path(__file__).resolve().parents[1])
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from config import BotConfig  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(
        bot_token="token-123",
        telegram_api_base="https://api.telegram.test",
        coingecko_api_base="https://coingecko.test/api/v3",
    )
