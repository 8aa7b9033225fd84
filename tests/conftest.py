"""Pytest configuration for all tests."""

import pytest

from tests.payloads import TEST_SECRET


@pytest.fixture
def secret() -> str:
    return TEST_SECRET
