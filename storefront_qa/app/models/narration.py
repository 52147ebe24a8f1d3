from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront_qa.app.core.config import NarrationTimingConfig, get_settings


class NarrationProfile(BaseModel):
    words_per_second: float = Field(default=2.5, gt=0)
    period_pause_ms: float = 300
    comma_pause_ms: float = 200
    buffer_multiplier: float = 1.2
    minimum_ms: int = 1500
    rounding_granularity_ms: int = Field(default=100, gt=0)

    @classmethod
    def from_settings(cls, config: Optional[NarrationTimingConfig] = None) -> "NarrationProfile":
        config = config or get_settings().narration_timing
        return cls(
            words_per_second=config.words_per_second,
            period_pause_ms=config.period_pause_ms,
            comma_pause_ms=config.comma_pause_ms,
            buffer_multiplier=config.buffer_multiplier,
            minimum_ms=config.minimum_ms,
            rounding_granularity_ms=config.rounding_granularity_ms,
        )


class TestStatus(str, Enum):
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class TestStep(BaseModel):
    __test__ = False

    title: str
    error: Optional[str] = None


class TestVideoInfo(BaseModel):
    __test__ = False

    test_name: str
    status: TestStatus = TestStatus.PASSED
    error: Optional[str] = None
    steps: List[TestStep] = Field(default_factory=list)
    duration_ms: Optional[float] = None
