import pytest

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.services.crawler import dismiss_overlays


@pytest.fixture(scope="session")
def storefront_url() -> str:
    return get_settings().storefront.authenticated_url()


@pytest.fixture
def storefront_page(page, storefront_url):
    """Homepage loaded behind basic auth with the cookie banner and marketing modal closed."""
    page.goto(storefront_url, wait_until="domcontentloaded")
    dismiss_overlays(page)
    return page
