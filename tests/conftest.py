"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from datetime import date
from pathlib import Path

import pytest
from hypothesis import settings as hypothesis_settings

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from speakflow.config import Settings  # noqa: E402
from speakflow.delivery.repository import ItemRepository  # noqa: E402
from speakflow.delivery.state_store import MemoryStore  # noqa: E402
from speakflow.domains.grammar import sample_questions  # noqa: E402
from speakflow.domains.wordbank import sample_words  # noqa: E402

# Property tests build whole repositories per example
hypothesis_settings.register_profile("speakflow", deadline=None)
hypothesis_settings.load_profile("speakflow")


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def today():
    """Fixed review date so schedules are deterministic."""
    return date(2024, 3, 1)


@pytest.fixture
def clock(today):
    return lambda: today


@pytest.fixture
def settings(tmp_path):
    """Default settings pointed at a throwaway data directory."""
    return Settings(data_dir=tmp_path)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def wordbank_repo(today):
    """Word bank repository seeded with every sample word, all due today."""
    repo = ItemRepository("wordbank")
    repo.add_items(sample_words(), today)
    return repo


@pytest.fixture
def grammar_repo(today):
    """Grammar repository seeded with the sample question bank."""
    repo = ItemRepository("grammar")
    repo.add_items(sample_questions(), today)
    return repo
