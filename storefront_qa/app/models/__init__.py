from storefront_qa.app.models.violations import (
    Impact,
    ViolationNode,
    ViolationRecord,
    PageViolationGroup,
    ViolationStats,
    AccessibilityReport,
)

from storefront_qa.app.models.narration import (
    NarrationProfile,
    TestStatus,
    TestStep,
    TestVideoInfo,
)

from storefront_qa.app.models.harness import (
    Attachment,
    TestCaseInfo,
    TestResultInfo,
    RunResult,
)

from storefront_qa.app.models.crawl import CrawlReport

__all__ = [
    "Impact",
    "ViolationNode",
    "ViolationRecord",
    "PageViolationGroup",
    "ViolationStats",
    "AccessibilityReport",
    "NarrationProfile",
    "TestStatus",
    "TestStep",
    "TestVideoInfo",
    "Attachment",
    "TestCaseInfo",
    "TestResultInfo",
    "RunResult",
    "CrawlReport",
]
