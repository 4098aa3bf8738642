"""
Shared pytest fixtures.

Lives at the project root so pytest's default prepend import mode makes
the top-level packages importable from tests/
"""
import pytest
from converter.toon_converter import ToonConverter


@pytest.fixture
def converter():
    return ToonConverter()
