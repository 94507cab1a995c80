"""Errors raised by the projection engine."""

from __future__ import annotations

from typing import List


class ProjectionInputError(ValueError):
    """Numeric input the engine cannot work with (negative amounts, impossible rates)."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors
