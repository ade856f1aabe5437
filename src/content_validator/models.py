"""Data models for the content validator module."""

from __future__ import annotations

from dataclasses import dataclass


ROOT_PATH = "$"


@dataclass(frozen=True)
class Violation:
    """A single schema defect found in the content document."""
    path: str  # e.g. "case_studies[2].id"
    message: str

    def __str__(self) -> str:
        return self.message


def format_violations(violations: list[Violation]) -> list[str]:
    """Number violations for display, starting at 1."""
    return [f"{index}. {violation.message}" for index, violation in enumerate(violations, start=1)]
