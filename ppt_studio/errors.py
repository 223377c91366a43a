"""Custom exceptions for presentation payload errors."""

from __future__ import annotations

from typing import List


class PresentationDataError(ValueError):
    """Raised when persisted presentation data cannot be loaded."""

    def __init__(self, issues: List[str]):
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid presentation data"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = ["Presentation data is invalid:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)
