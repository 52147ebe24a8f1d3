from storefront_qa.app.services.narration_timing import compute_delay, narrated_log, quick_log, long_log
from storefront_qa.app.services.accessibility_reporter import AccessibilityReporter, ReportGenerationError
from storefront_qa.app.services.console_logger import ConsoleLoggerReporter
from storefront_qa.app.services.narration_reporter import NarrationReporter
from storefront_qa.app.services.video_narrator import VideoNarrator

__all__ = [
    "compute_delay",
    "narrated_log",
    "quick_log",
    "long_log",
    "AccessibilityReporter",
    "ReportGenerationError",
    "ConsoleLoggerReporter",
    "NarrationReporter",
    "VideoNarrator",
]
