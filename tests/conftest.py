"""
Shared fixtures
"""

import pytest

from tests.helpers import make_landmarks


@pytest.fixture
def landmarks():
    return make_landmarks()


@pytest.fixture
def landmark_factory():
    return make_landmarks
