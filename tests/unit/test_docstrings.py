"""Docstring examples that run without a network or broker."""

from __future__ import annotations

import doctest
from types import ModuleType

import pytest

import personspine.enricher
import personspine.http.rate_limiter


@pytest.mark.parametrize(
    "module",
    [personspine.enricher, personspine.http.rate_limiter],
    ids=lambda m: m.__name__,
)
def test_examples_run(module: ModuleType) -> None:
    result = doctest.testmod(module, verbose=False)

    assert result.attempted > 0
    assert result.failed == 0
