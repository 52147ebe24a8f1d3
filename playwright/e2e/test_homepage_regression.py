import re
import time

import pytest
from playwright.sync_api import expect

from storefront_qa.app.services.narration_timing import narrated_log

pytestmark = pytest.mark.e2e

HOMEPAGE_TITLE = "Cuisinart - Kitchen appliances for the heart of your home"
MENU_ITEMS = ["Appliances", "Cookware", "Tools", "Cutlery"]
FOOTER_LINKS = ["About", "Contact", "Customer Service"]


class TestHomepageRegression:
    def test_title_and_logo(self, storefront_page):
        narrated_log(storefront_page, "Verifying homepage elements")

        expect(storefront_page).to_have_title(HOMEPAGE_TITLE)
        expect(storefront_page.locator(".banner_logo")).to_be_visible()
        print("✓ Logo is visible")

        narrated_log(storefront_page, "Homepage loaded successfully with logo and title")

    def test_main_navigation(self, storefront_page):
        narrated_log(storefront_page, "Checking main navigation menu")

        expect(storefront_page.locator("nav, .navigation, .main-menu").first).to_be_visible()
        for item in MENU_ITEMS:
            menu_item = storefront_page.locator(f'nav a:has-text("{item}"), .navigation a:has-text("{item}")').first
            expect(menu_item).to_be_visible()
            print(f'✓ Menu item "{item}" is visible')

        narrated_log(storefront_page, "All main navigation items verified")

    def test_hero_banner(self, storefront_page):
        narrated_log(storefront_page, "Checking hero banner and featured content")

        hero = storefront_page.locator(".header-banner, .experience-commerce_layouts-herocarousel")
        expect(hero.first).to_be_visible(timeout=10_000)

        narrated_log(storefront_page, "Featured content section verified")

    def test_search(self, storefront_page):
        narrated_log(storefront_page, "Testing search functionality")

        search_input = storefront_page.locator(".search-field").first
        expect(search_input).to_be_visible()
        search_input.fill("coffee maker")
        storefront_page.locator('button.fa-search, button[type="submit"]').first.click()
        storefront_page.wait_for_load_state("networkidle")

        expect(storefront_page).to_have_url(re.compile("search", re.IGNORECASE))
        narrated_log(storefront_page, "Search functionality working correctly")

    def test_footer_links(self, storefront_page):
        narrated_log(storefront_page, "Verifying footer content")

        storefront_page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        expect(storefront_page.locator("footer, .footer").first).to_be_visible()
        for text in FOOTER_LINKS:
            link = storefront_page.locator(f'footer a:has-text("{text}"), .footer a:has-text("{text}")').first
            # optional links, reported but not asserted
            if link.is_visible():
                print(f'✓ Footer link "{text}" found')
            else:
                print(f'⚠ Footer link "{text}" not found (optional)')

        narrated_log(storefront_page, "Footer content verified")

    def test_mini_cart(self, storefront_page):
        narrated_log(storefront_page, "Testing shopping cart functionality")

        cart_icon = storefront_page.locator(".minicart").first
        expect(cart_icon).to_be_visible()
        cart_icon.click()
        expect(
            storefront_page.locator('.popover, .minicart-content, [class*="cart-dropdown"]').first
        ).to_be_visible(timeout=5000)

        narrated_log(storefront_page, "Shopping cart functionality verified")

    def test_load_time(self, storefront_page):
        narrated_log(storefront_page, "Testing page load performance")

        started = time.monotonic()
        storefront_page.reload(wait_until="load")
        load_ms = int((time.monotonic() - started) * 1000)
        print(f"✓ Page loaded in {load_ms}ms")

        assert load_ms < 5000
        narrated_log(storefront_page, f"Page load time: {load_ms} milliseconds")
