from typing import Any, List, Optional, Sequence

from loguru import logger

from storefront_qa.app.models.violations import ViolationRecord

AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"
DEFAULT_TAGS = ("wcag2a", "wcag2aa")

_AXE_RUN_SCRIPT = """
async (tags) => {
    if (!window.axe) {
        return null;
    }
    const options = tags && tags.length ? { runOnly: { type: 'tag', values: tags } } : {};
    return await axe.run(document, options);
}
"""


class AxeScanError(Exception):
    pass


def scan_page(page: Any, tags: Optional[Sequence[str]] = DEFAULT_TAGS) -> List[ViolationRecord]:
    """Run axe-core against the page's current document.

    ``page`` is a Playwright sync ``Page``. Pass ``tags=None`` to run every
    rule axe ships with.
    """
    try:
        page.add_script_tag(url=AXE_CDN)
    except Exception as e:
        raise AxeScanError(f"Failed to inject axe-core from {AXE_CDN}: {e}") from e

    results = page.evaluate(_AXE_RUN_SCRIPT, list(tags) if tags else [])
    if not results:
        raise AxeScanError(f"axe-core is not available on {page.url}")

    violations = [ViolationRecord.model_validate(v) for v in results.get("violations", [])]
    logger.info(f"axe-core found {len(violations)} violation(s) on {page.url}")
    return violations


async def async_scan_page(
    page: Any, tags: Optional[Sequence[str]] = DEFAULT_TAGS
) -> List[ViolationRecord]:
    try:
        await page.add_script_tag(url=AXE_CDN)
    except Exception as e:
        raise AxeScanError(f"Failed to inject axe-core from {AXE_CDN}: {e}") from e

    results = await page.evaluate(_AXE_RUN_SCRIPT, list(tags) if tags else [])
    if not results:
        raise AxeScanError(f"axe-core is not available on {page.url}")

    violations = [ViolationRecord.model_validate(v) for v in results.get("violations", [])]
    logger.info(f"axe-core found {len(violations)} violation(s) on {page.url}")
    return violations
