import pytest

from storefront_qa.app.services.axe_scanner import scan_page
from storefront_qa.app.services.narration_timing import long_log, quick_log

pytestmark = pytest.mark.e2e

PAGES = [
    ("Home Page", ""),
    ("Air Fryers Category Page", "/appliances/air-fryers/"),
    ("Cart Page", "/cart"),
]


@pytest.mark.parametrize("page_name, path", PAGES, ids=[name for name, _ in PAGES])
def test_page_accessibility(page, storefront_url, accessibility_reporter, page_name, path):
    page.goto(storefront_url.rstrip("/") + path, wait_until="domcontentloaded")
    quick_log(page, f"Scanning {page_name} for accessibility issues")

    violations = scan_page(page)
    accessibility_reporter.add_violations(page_name, violations)

    long_log(page, f"{page_name}: {len(violations)} accessibility violations recorded")
