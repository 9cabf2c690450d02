"""Shared pytest fixtures."""

import pytest

from clarify.errors import StaticWorkbook


@pytest.fixture
def workbook():
    """Workbook metadata for a formula named TOTAL."""
    return StaticWorkbook(formula_name="TOTAL", presentation={"panel": "errors"})
