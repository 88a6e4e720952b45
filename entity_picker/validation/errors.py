from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str


class ValidationError(Exception):
    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__("\n".join(f"{i.code}: {i.message}" for i in issues))


EMPTY_SELECTION = "empty_selection"


class EmptySelectionError(ValidationError):
    """Commit was requested while nothing is selected."""

    def __init__(self, message: str = "No entities selected. Select at least one to continue."):
        super().__init__([ValidationIssue(EMPTY_SELECTION, message)])

    @property
    def user_message(self) -> str:
        return self.issues[0].message
