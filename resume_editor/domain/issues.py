"""Issue records raised by the validator, scorers and pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Issue:
    """A single structural finding.

    ``impact`` is only set by the ATS scorer (the points it cost).
    """

    severity: Severity
    message: str
    fix: str = ""
    impact: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        if self.impact is None:
            data.pop("impact")
        return data
