import pytest

from storefront_qa.app.models.harness import Attachment, TestCaseInfo, TestResultInfo
from storefront_qa.app.services.console_logger import ConsoleLoggerReporter


@pytest.fixture
def case():
    return TestCaseInfo(title="adds product to cart", parent_title="Cart")


@pytest.fixture
def artifact_dir(tmp_path):
    directory = tmp_path / "test-results" / "cart-adds-product-to-cart-chromium"
    directory.mkdir(parents=True)
    return directory


def _result(artifact_dir):
    return TestResultInfo(
        attachments=[Attachment(name="video", content_type="video/webm", path=artifact_dir / "video.webm")]
    )


class TestConsoleLoggerReporter:
    def test_keeps_meaningful_lines_in_order(self, case):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)

        reporter.on_stdout("  Navigating to homepage  \n", case)
        reporter.on_stdout(b"Opening the cart\n", case)
        reporter.on_stdout("\n   \n", case)

        assert reporter.get_logs(case) == ["Navigating to homepage", "Opening the cart"]

    @pytest.mark.parametrize(
        "noise",
        [
            "[dotenv@16.4.5] injecting env (3) from .env",
            "injecting env (0)",
            "Page URL: https://stage.cuisinart.com/",
            "Page title: Cuisinart",
        ],
    )
    def test_default_noise_is_dropped(self, case, noise):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout(noise, case)
        assert reporter.get_logs(case) == []

    def test_custom_exclusions(self, case):
        reporter = ConsoleLoggerReporter(excluded_substrings=["DEBUG"])
        reporter.on_test_begin(case)
        reporter.on_stdout("DEBUG: cookie banner", case)
        reporter.on_stdout("Page URL: kept now", case)
        assert reporter.get_logs(case) == ["Page URL: kept now"]

    def test_output_without_test_is_ignored(self, case):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("global setup output")
        assert reporter.get_logs(case) == []

    def test_tests_are_kept_apart(self, case):
        other = TestCaseInfo(title="adds product to cart", parent_title="Mini Cart")
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_test_begin(other)

        reporter.on_stdout("first", case)
        reporter.on_stdout("second", other)

        assert reporter.get_logs(case) == ["first"]
        assert reporter.get_logs(other) == ["second"]

    def test_begin_resets_previous_attempt(self, case):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("attempt one", case)
        reporter.on_test_begin(case)
        assert reporter.get_logs(case) == []

    def test_writes_file_beside_first_attachment(self, case, artifact_dir):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("Step one", case)
        reporter.on_stdout("Step two", case)

        path = reporter.on_test_end(case, _result(artifact_dir))

        assert path == artifact_dir / "console-logs.txt"
        assert path.read_text(encoding="utf-8") == "Step one\nStep two"

    def test_custom_file_name(self, case, artifact_dir):
        reporter = ConsoleLoggerReporter(file_name="narration.txt")
        reporter.on_test_begin(case)
        reporter.on_stdout("Step one", case)
        assert reporter.on_test_end(case, _result(artifact_dir)).name == "narration.txt"

    def test_nothing_written_without_logs(self, case, artifact_dir):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("Page URL: https://example.com", case)

        assert reporter.on_test_end(case, _result(artifact_dir)) is None
        assert not (artifact_dir / "console-logs.txt").exists()

    def test_nothing_written_without_attachments(self, case):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("Step one", case)
        assert reporter.on_test_end(case, TestResultInfo()) is None

    def test_attachment_without_path_is_skipped(self, case, artifact_dir):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("Step one", case)
        result = TestResultInfo(
            attachments=[
                Attachment(name="trace"),
                Attachment(name="screenshot", content_type="image/png", path=artifact_dir / "shot.png"),
            ]
        )

        path = reporter.on_test_end(case, result)

        assert path == artifact_dir / "console-logs.txt"

    def test_write_failure_is_reported_not_raised(self, case, tmp_path):
        reporter = ConsoleLoggerReporter()
        reporter.on_test_begin(case)
        reporter.on_stdout("Step one", case)
        missing = tmp_path / "does-not-exist"

        assert reporter.on_test_end(case, _result(missing)) is None
