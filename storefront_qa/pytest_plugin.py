"""pytest wiring for the storefront e2e suite.

Load it with ``-p storefront_qa.pytest_plugin`` (``playwright/e2e/pytest.ini``
does this). It feeds pytest's run lifecycle into the console-log and
narration reporters and provides a session-wide ``accessibility_reporter``
fixture whose reports are written when the session ends. Test artifacts and
narrated videos of one run are grouped under ``session_<timestamp>``.
"""

import mimetypes
from pathlib import Path
from typing import Dict, List

import pytest
from slugify import slugify

from storefront_qa.app.core.config import get_settings, session_dir, session_timestamp
from storefront_qa.app.core.logging import configure_logging
from storefront_qa.app.models.harness import Attachment, RunResult, TestCaseInfo, TestResultInfo
from storefront_qa.app.models.narration import TestStatus
from storefront_qa.app.services.accessibility_reporter import AccessibilityReporter
from storefront_qa.app.services.console_logger import ConsoleLoggerReporter
from storefront_qa.app.services.narration_reporter import NarrationReporter

PLUGIN_NAME = "storefront-qa-reporting"


def case_from_nodeid(nodeid: str) -> TestCaseInfo:
    parent, _, title = nodeid.rpartition("::")
    return TestCaseInfo(title=title or nodeid, parent_title=parent)


def collect_attachments(artifact_dir: Path) -> List[Attachment]:
    if not artifact_dir.is_dir():
        return []
    attachments = []
    for path in sorted(artifact_dir.iterdir()):
        if not path.is_file():
            continue
        if path.suffix == ".webm":
            # pytest-playwright names recordings video.webm, video-1.webm, ...
            attachments.append(Attachment(name="video", content_type="video/webm", path=path))
            continue
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        attachments.append(Attachment(name=path.stem, content_type=content_type, path=path))
    return attachments


def _status_from_report(report: pytest.TestReport) -> TestStatus:
    if report.failed:
        return TestStatus.FAILED
    if report.skipped:
        return TestStatus.SKIPPED
    return TestStatus.PASSED


class StorefrontReportingPlugin:
    def __init__(self, config: pytest.Config):
        self.config = config
        self.console_logger = ConsoleLoggerReporter()
        self.narration_reporter = NarrationReporter(
            results_dir=self._output_dir(),
            output_dir=session_dir(get_settings().report.narrated_videos_dir),
        )
        self._outcomes: Dict[str, TestStatus] = {}

    def _output_dir(self) -> Path:
        try:
            output = self.config.getoption("--output")
        except ValueError:
            output = None
        return session_dir(output or get_settings().report.test_results_dir)

    def artifact_dir(self, nodeid: str) -> Path:
        return self._output_dir() / slugify(nodeid)

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        self.narration_reporter.on_begin()

    def pytest_runtest_logstart(self, nodeid: str, location) -> None:
        self.console_logger.on_test_begin(case_from_nodeid(nodeid))

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        if report.when == "call" or (report.when == "setup" and not report.passed):
            self._outcomes[report.nodeid] = _status_from_report(report)
        elif report.when == "teardown" and report.failed:
            self._outcomes[report.nodeid] = TestStatus.FAILED

        # Videos are only flushed to disk when the browser context closes in teardown.
        if report.when != "teardown":
            return

        test = case_from_nodeid(report.nodeid)
        for line in report.capstdout.splitlines():
            self.console_logger.on_stdout(line, test)

        result = TestResultInfo(
            status=self._outcomes.pop(report.nodeid, TestStatus.PASSED),
            attachments=collect_attachments(self.artifact_dir(report.nodeid)),
            duration_ms=report.duration * 1000,
        )
        self.console_logger.on_test_end(test, result)
        self.narration_reporter.on_test_end(test, result)

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        status = "passed" if exitstatus == 0 else "failed"
        self.narration_reporter.on_end(RunResult(status=status))


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("storefront-qa")
    group.addoption(
        "--a11y-report-dir",
        action="store",
        default=None,
        help="Directory for the accessibility reports (default: REPORT_OUTPUT_DIR).",
    )
    group.addoption(
        "--a11y-report-title",
        action="store",
        default="Accessibility Test",
        help="Label shown in the accessibility report header.",
    )


def pytest_configure(config: pytest.Config) -> None:
    configure_logging()
    stamp = session_timestamp()
    # pytest-playwright writes videos and traces under --output; group them per run
    output = getattr(config.option, "output", None)
    if output:
        config.option.output = str(session_dir(output, stamp))
    config.addinivalue_line("markers", "e2e: drives a real browser against a storefront")
    if not config.pluginmanager.has_plugin(PLUGIN_NAME):
        config.pluginmanager.register(StorefrontReportingPlugin(config), PLUGIN_NAME)


@pytest.fixture(scope="session")
def accessibility_reporter(request: pytest.FixtureRequest):
    reporter = AccessibilityReporter(output_dir=request.config.getoption("--a11y-report-dir"))
    yield reporter
    title = request.config.getoption("--a11y-report-title")
    reporter.generate_report(title)
    reporter.generate_json_report(title)
