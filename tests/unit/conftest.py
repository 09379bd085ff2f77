"""Shared unit-test fixtures.

Provides:
- Fake oracles for the verifiers
- Sample content per domain
"""

from unittest.mock import AsyncMock

import pytest

from stem_verifier.domain.models import SandboxPayload

# ============================================================================
# Fake Oracles
# ============================================================================


@pytest.fixture
def mock_math_oracle() -> AsyncMock:
    """Create mock symbolic-math oracle answering with two pods."""
    mock = AsyncMock()
    mock.query = AsyncMock(return_value={"Input": "x^2 + 2x + 1", "Result": "(x + 1)^2"})
    return mock


@pytest.fixture
def mock_sandbox() -> AsyncMock:
    """Create mock sandbox reporting an accepted run."""
    mock = AsyncMock()
    mock.run = AsyncMock(
        return_value=(
            3,
            SandboxPayload(status="Accepted", stdout="2\n", time="0.01", memory=3200),
        )
    )
    return mock


# ============================================================================
# Sample Data
# ============================================================================


@pytest.fixture
def balanced_equation() -> str:
    return "2H2 + O2 -> 2H2O"


@pytest.fixture
def unbalanced_equation() -> str:
    return "H2 + O2 -> H2O"


@pytest.fixture
def python_snippet() -> str:
    return "```python\nprint(1 + 1)\n```"
