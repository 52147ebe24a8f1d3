from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.models.violations import (
    AccessibilityReport,
    Impact,
    PageViolationGroup,
    ViolationRecord,
    ViolationStats,
)

REPORT_FILE_NAME = "accessibility-report.html"
JSON_REPORT_FILE_NAME = "accessibility-report.json"
CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js@4.4.0/dist/chart.umd.min.js"
TRUNCATION_MARKER = "..."

TEMPLATE_PATH = Path(__file__).parent.parent / "templates"
env = Environment(loader=FileSystemLoader(TEMPLATE_PATH), autoescape=select_autoescape(["html", "xml", "html.j2"]))

ViolationInput = Union[ViolationRecord, Mapping[str, Any]]


class ReportGenerationError(Exception):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to write accessibility report to {path}: {reason}")


def truncate_snippet(html: str, max_length: int) -> str:
    if len(html) > max_length:
        return html[:max_length] + TRUNCATION_MARKER
    return html


def calculate_stats(groups: Iterable[PageViolationGroup]) -> ViolationStats:
    counts = {impact: 0 for impact in Impact}
    for group in groups:
        for violation in group.violations:
            counts[violation.severity] += 1
    return ViolationStats(
        critical=counts[Impact.CRITICAL],
        serious=counts[Impact.SERIOUS],
        moderate=counts[Impact.MODERATE],
        minor=counts[Impact.MINOR],
        total=sum(counts.values()),
    )


class AccessibilityReporter:
    """Collects axe-core findings page by page and renders them as one report.

    Groups are kept in the order pages were visited. Statistics are always
    derived from the stored groups when asked for, there is no separate
    counter to keep in sync.
    """

    def __init__(self, output_dir: Optional[Union[str, Path]] = None):
        self.settings = get_settings()
        self.output_dir = Path(output_dir or self.settings.report.output_dir)
        self._groups: List[PageViolationGroup] = []

    def add_violations(self, page: str, violations: Iterable[ViolationInput]) -> None:
        records = tuple(
            v if isinstance(v, ViolationRecord) else ViolationRecord.model_validate(v)
            for v in violations
        )
        if not records:
            return
        self._groups.append(PageViolationGroup(page=page, violations=records))
        logger.debug(f"Recorded {len(records)} accessibility violation(s) on {page}")

    def get_violations(self) -> List[PageViolationGroup]:
        return list(self._groups)

    def calculate_stats(self) -> ViolationStats:
        return calculate_stats(self._groups)

    def to_report(self, test_name: str, generated_at: Optional[datetime] = None) -> AccessibilityReport:
        return AccessibilityReport(
            test_name=test_name,
            generated_at=generated_at or datetime.now(),
            stats=self.calculate_stats(),
            pages=self.get_violations(),
        )

    def _page_context(self, group: PageViolationGroup) -> dict:
        max_nodes = self.settings.report.max_nodes_per_violation
        max_length = self.settings.report.snippet_max_length
        violations = []
        for violation in group.violations:
            shown = violation.nodes[:max_nodes]
            violations.append(
                {
                    "id": violation.id,
                    "help": violation.help,
                    "description": violation.description,
                    "help_url": violation.help_url,
                    "impact": violation.severity.value,
                    "node_count": len(violation.nodes),
                    "hidden_count": len(violation.nodes) - len(shown),
                    "nodes": [
                        {
                            "selector": node.selector_path,
                            "html": truncate_snippet(node.html, max_length),
                        }
                        for node in shown
                    ],
                }
            )
        return {"name": group.page, "violations": violations}

    def render_html(self, test_name: str, generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or datetime.now()
        stats = self.calculate_stats()
        pages = [self._page_context(group) for group in self._groups]
        template = env.get_template("accessibility_report.html.j2")
        return template.render(
            test_name=test_name,
            generated_at=generated_at.strftime("%m/%d/%Y, %I:%M:%S %p"),
            stats=stats,
            has_violations=stats.total > 0,
            pages=pages,
            severity_chart={
                "labels": ["Critical", "Serious", "Moderate", "Minor"],
                "data": [stats.critical, stats.serious, stats.moderate, stats.minor],
            },
            page_chart={
                "labels": [page["name"] for page in pages],
                "data": [len(page["violations"]) for page in pages],
            },
            chart_js_url=CHART_JS_URL,
        )

    def _write(self, directory: Path, file_name: str, content: str) -> Path:
        report_path = directory / file_name
        try:
            directory.mkdir(parents=True, exist_ok=True)
            report_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ReportGenerationError(report_path, str(e)) from e
        return report_path

    def generate_report(
        self,
        test_name: str = "Accessibility Test",
        output_dir: Optional[Union[str, Path]] = None,
    ) -> Path:
        directory = Path(output_dir) if output_dir else self.output_dir
        report_path = self._write(directory, REPORT_FILE_NAME, self.render_html(test_name))
        logger.info(f"Accessibility report generated: {report_path}")
        return report_path

    def generate_json_report(
        self,
        test_name: str = "Accessibility Test",
        output_dir: Optional[Union[str, Path]] = None,
    ) -> Path:
        directory = Path(output_dir) if output_dir else self.output_dir
        content = self.to_report(test_name).model_dump_json(indent=2, by_alias=True)
        report_path = self._write(directory, JSON_REPORT_FILE_NAME, content)
        logger.info(f"Accessibility JSON report generated: {report_path}")
        return report_path
