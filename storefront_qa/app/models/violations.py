from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Impact(str, Enum):
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @classmethod
    def parse(cls, value: Optional[Any]) -> "Impact":
        """Exact match on axe-core's lowercase values; anything else is minor."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.MINOR


class ViolationNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # elements inside shadow DOM come as a nested list: host first, then inner selectors
    target: Tuple[Union[str, Tuple[str, ...]], ...] = ()
    html: str = ""
    failure_summary: Optional[str] = Field(default=None, alias="failureSummary")
    impact: Optional[str] = None

    @property
    def selector_path(self) -> str:
        parts = []
        for part in self.target:
            if isinstance(part, tuple):
                parts.extend(part)
            else:
                parts.append(part)
        return " > ".join(parts)


class ViolationRecord(BaseModel):
    """A single axe-core rule failure on one page.

    Accepts the raw dictionaries returned by ``axe.run`` (camelCase keys) as
    well as snake_case keyword arguments. ``impact`` is kept as reported;
    use :attr:`severity` for the bucket it is counted under.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    impact: Optional[str] = None
    description: str = ""
    help: str = ""
    help_url: str = Field(default="", alias="helpUrl")
    tags: Tuple[str, ...] = ()
    nodes: Tuple[ViolationNode, ...] = ()

    @property
    def severity(self) -> Impact:
        return Impact.parse(self.impact)


class PageViolationGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: str
    violations: Tuple[ViolationRecord, ...]


class ViolationStats(BaseModel):
    critical: int = 0
    serious: int = 0
    moderate: int = 0
    minor: int = 0
    total: int = 0

    def count(self, impact: Impact) -> int:
        return getattr(self, impact.value)


class AccessibilityReport(BaseModel):
    test_name: str
    generated_at: datetime = Field(default_factory=datetime.now)
    stats: ViolationStats
    pages: List[PageViolationGroup] = Field(default_factory=list)
