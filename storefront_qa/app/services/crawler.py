import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from storefront_qa.app.models.crawl import CrawlReport

NOT_FOUND = "not found"

ONETRUST_ACCEPT = "#onetrust-accept-btn-handler"
ATTENTIVE_FRAME = 'iframe[src*="attn.tv"]'
ATTENTIVE_CLOSE = "#closeIconSvg"

HOMEPAGE_ELEMENTS = {
    "logo": 'a.logo, .header-logo, [class*="logo"]',
    "mainNav": "nav, .navigation, .main-menu",
    "searchInput": 'input[type="search"], input[placeholder*="Search"], .search-input',
    "cartIcon": '.minicart, .cart-icon, [class*="cart"]',
    "heroSection": '.hero, .banner, .featured, [class*="carousel"], [class*="slider"]',
    "mainContent": "main, .main-content, #main",
    "footer": "footer, .footer",
}

HOMEPAGE_COUNTS = {
    "heroImagesCount": ".hero img, .banner img, .carousel img",
    "productTilesCount": '.product, .product-tile, [class*="product-item"]',
    "categorySections": '.category, [class*="category"]',
}

# name -> (locator, fallback when nothing matches)
KEY_SELECTORS = {
    "logo": ('a.logo, .header-logo, [class*="logo"]', "a.logo"),
    "mainNav": ("nav", "nav"),
    "searchInput": ('input[type="search"]', 'input[type="search"]'),
    "cart": ('[class*="cart"]', '[class*="cart"]'),
    "hero": ('[class*="hero"], [class*="banner"], [class*="carousel"]', '[class*="hero"]'),
    "footer": ("footer", "footer"),
}

LOGIN_FORM_CANDIDATES = {
    "email": (
        "#login-form-email",
        'input[name="loginEmail"]',
        'input[type="email"]',
        "#dwfrm_login_username",
        'input[name="dwfrm_login_username"]',
    ),
    "password": (
        "#login-form-password",
        'input[name="loginPassword"]',
        'input[type="password"]',
        "#dwfrm_login_password",
        'input[name="dwfrm_login_password"]',
    ),
    "submit": (
        'button[type="submit"]',
        "button.login-button",
        'button[name="dwfrm_login_login"]',
        ".login-form button",
        'input[type="submit"]',
    ),
    "csrf": (
        'input[name="csrf_token"]',
        'input[name="dwfrm_login_securekey"]',
        'input[name="_csrf"]',
    ),
}

_SHORT_SELECTOR_SCRIPT = """
(el, fallback) => el.className ? `.${el.className.split(' ')[0]}` : (fallback || el.tagName.toLowerCase())
"""


def dismiss_overlays(page: Any) -> None:
    """Close the cookie banner and the marketing modal if they show up."""
    try:
        page.locator(ONETRUST_ACCEPT).click(timeout=5000)
        page.wait_for_timeout(1000)
    except PlaywrightError:
        logger.info("No OneTrust banner found")

    try:
        frame = page.frame_locator(ATTENTIVE_FRAME).first
        frame.locator(ATTENTIVE_CLOSE).first.click(timeout=10000)
        page.wait_for_timeout(2000)
    except PlaywrightError:
        logger.info("No Attentive modal found")


def first_class(page: Any, selector: str) -> str:
    try:
        return page.locator(selector).first.get_attribute("class", timeout=5000) or NOT_FOUND
    except PlaywrightError:
        return NOT_FOUND


def short_selector(page: Any, selector: str, fallback: str) -> str:
    try:
        return page.locator(selector).first.evaluate(_SHORT_SELECTOR_SCRIPT, fallback, timeout=5000)
    except PlaywrightError:
        return fallback


def find_first_selector(page: Any, candidates: Sequence[str]) -> Optional[str]:
    for selector in candidates:
        if page.locator(selector).count() > 0:
            return selector
    return None


def collect_homepage_elements(page: Any) -> Dict[str, Any]:
    elements: Dict[str, Any] = {}
    for name, selector in HOMEPAGE_ELEMENTS.items():
        if name == "footer":
            page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
            page.wait_for_timeout(1000)
        elements[name] = first_class(page, selector)
        logger.info(f"{name}: {elements[name]}")

    for name, selector in HOMEPAGE_COUNTS.items():
        elements[name] = page.locator(selector).count()
        logger.info(f"{name}: {elements[name]}")

    elements["navLinks"] = page.locator("nav a, .navigation a, .main-menu a").all_text_contents()
    elements["footerLinks"] = page.locator("footer a, .footer a").all_text_contents()
    return elements


def collect_key_selectors(page: Any) -> Dict[str, str]:
    return {
        name: short_selector(page, selector, fallback)
        for name, (selector, fallback) in KEY_SELECTORS.items()
    }


def collect_login_form(page: Any) -> Dict[str, Optional[str]]:
    selectors = {}
    for name, candidates in LOGIN_FORM_CANDIDATES.items():
        selectors[name] = find_first_selector(page, candidates)
        logger.info(f"{name}: {selectors[name] or 'NOT FOUND'}")
    return selectors


def _save_report(report: CrawlReport, path: Path) -> Path:
    path.write_text(json.dumps(report.model_dump(mode="json"), indent=2), encoding="utf-8")
    logger.info(f"Crawl report saved to: {path}")
    return path


def crawl_homepage(url: str, output_dir: Union[str, Path] = ".") -> CrawlReport:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        page = browser.new_page()
        try:
            logger.info(f"Crawling homepage {url}")
            page.goto(url, wait_until="domcontentloaded", timeout=60_000)
            dismiss_overlays(page)

            report = CrawlReport(url=page.url, title=page.title())
            report.elements = collect_homepage_elements(page)
            report.selectors = collect_key_selectors(page)

            screenshot_path = output_dir / "homepage-screenshot.png"
            page.screenshot(path=str(screenshot_path), full_page=True)
            report.screenshot = str(screenshot_path)

            html_path = output_dir / "homepage-full.html"
            html_path.write_text(page.content(), encoding="utf-8")
            report.html_dump = str(html_path)
        finally:
            browser.close()

    _save_report(report, output_dir / "homepage-crawl-report.json")
    return report


def crawl_login_page(url: str, output_dir: Union[str, Path] = ".") -> CrawlReport:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        page = browser.new_page()
        try:
            logger.info(f"Crawling login page {url}")
            page.goto(url, wait_until="domcontentloaded", timeout=60_000)
            dismiss_overlays(page)

            report = CrawlReport(url=page.url, title=page.title())
            report.selectors = collect_login_form(page)
            try:
                form_html = page.locator("form").first.inner_html(timeout=5000)
            except PlaywrightError:
                form_html = "Form not found"
            report.elements["formHtml"] = form_html[:1000]
        finally:
            browser.close()

    _save_report(report, output_dir / "login-crawl-report.json")
    return report
