"""Shared pytest fixtures"""

import pytest

from cinemind.models import InputType, ProductionMode, StoryInput
from cinemind.store import ProductionStore
from tests.mocks.generation_client import MockGenerationClient


@pytest.fixture
def mock_client():
    """Fresh mock generation client for each test"""
    return MockGenerationClient()


@pytest.fixture
def store():
    return ProductionStore()


@pytest.fixture
def logline_input():
    """The 'Echo' example run"""
    return StoryInput(
        title="Echo",
        genre="Sci-Fi",
        mode=ProductionMode.NETFLIX,
        language="English",
        content="A retired detective discovers a time machine in his basement.",
        input_type=InputType.LOGLINE,
    )


@pytest.fixture
def script_input():
    return StoryInput(
        title="Night Shift",
        genre="Noir",
        mode=ProductionMode.FESTIVAL,
        language="French",
        content="INT. DINER - NIGHT\nA waitress counts tips while the rain hammers the window.",
        input_type=InputType.SCRIPT,
    )
