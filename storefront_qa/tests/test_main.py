from unittest.mock import patch

from storefront_qa.app.demo import DEMO_TEST_NAME, build_demo_reporter
from storefront_qa.app.main import main


class TestDemoReport:
    def test_demo_findings(self):
        reporter = build_demo_reporter()
        stats = reporter.calculate_stats()

        assert [g.page for g in reporter.get_violations()] == [
            "Home Page",
            "Air Fryers Category Page",
            "Product Details Page",
            "Payment Form",
            "Order Confirmation Page",
        ]
        assert (stats.critical, stats.serious, stats.moderate, stats.minor) == (1, 7, 2, 0)
        assert stats.total == 10

    def test_cli_writes_report(self, tmp_path):
        assert main(["demo-report", "--output-dir", str(tmp_path / "out")]) == 0

        html = (tmp_path / "out" / "accessibility-report.html").read_text(encoding="utf-8")
        assert DEMO_TEST_NAME in html
        assert html.count('<div class="page-block">') == 5
        assert html.count('<div class="element-item">') == 14
        assert "and 40 more elements not shown" in html


class TestCommands:
    def test_narrate_without_credentials_fails(self, tmp_path):
        assert main(["narrate", str(tmp_path / "results"), str(tmp_path / "out")]) == 1

    @patch("storefront_qa.app.main.VideoNarrator")
    @patch("storefront_qa.app.main.AzureSpeechSynthesizer")
    def test_narrate(self, mock_synth, mock_narrator, speech_configured):
        assert main(["narrate"]) == 0
        mock_narrator.return_value.process_test_videos.assert_called_once_with("test-results", "narrated-videos")

    @patch("storefront_qa.app.main.crawl_homepage")
    def test_crawl_homepage_default_url(self, mock_crawl):
        assert main(["crawl-homepage", "--output-dir", "crawl"]) == 0
        mock_crawl.assert_called_once_with("https://stage.cuisinart.com", "crawl")

    @patch("storefront_qa.app.main.crawl_login_page")
    def test_crawl_login_explicit_url(self, mock_crawl):
        assert main(["--log-level", "debug", "crawl-login", "--url", "https://example.com/login"]) == 0
        mock_crawl.assert_called_once_with("https://example.com/login", ".")
