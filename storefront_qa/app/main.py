import argparse
import sys
from typing import List, Optional

from loguru import logger

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.core.logging import configure_logging
from storefront_qa.app.demo import generate_demo_report
from storefront_qa.app.services.crawler import crawl_homepage, crawl_login_page
from storefront_qa.app.services.speech_synthesis import AzureSpeechSynthesizer, SpeechNotConfiguredError
from storefront_qa.app.services.video_narrator import VideoNarrator


def _narrate(args: argparse.Namespace) -> int:
    try:
        synthesizer = AzureSpeechSynthesizer()
    except SpeechNotConfiguredError as e:
        logger.error(str(e))
        return 1
    VideoNarrator(synthesizer=synthesizer).process_test_videos(args.results_dir, args.output_dir)
    return 0


def _demo_report(args: argparse.Namespace) -> int:
    report_path = generate_demo_report(args.output_dir)
    logger.info(f"Demo accessibility report generated: {report_path}")
    return 0


def _crawl_homepage(args: argparse.Namespace) -> int:
    crawl_homepage(args.url or get_settings().storefront.authenticated_url(), args.output_dir)
    return 0


def _crawl_login(args: argparse.Namespace) -> int:
    crawl_login_page(args.url or get_settings().storefront.authenticated_url("/login"), args.output_dir)
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="storefront-qa", description="Storefront QA utilities")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    narrate = subparsers.add_parser("narrate", help="Add voice-over narration to recorded test videos")
    narrate.add_argument("results_dir", nargs="?", default=settings.report.test_results_dir)
    narrate.add_argument("output_dir", nargs="?", default=settings.report.narrated_videos_dir)
    narrate.set_defaults(handler=_narrate)

    demo = subparsers.add_parser("demo-report", help="Render the accessibility report with sample findings")
    demo.add_argument("--output-dir", default=settings.report.output_dir)
    demo.set_defaults(handler=_demo_report)

    homepage = subparsers.add_parser("crawl-homepage", help="Inventory homepage elements and selectors")
    homepage.add_argument("--url", default=None)
    homepage.add_argument("--output-dir", default=".")
    homepage.set_defaults(handler=_crawl_homepage)

    login = subparsers.add_parser("crawl-login", help="Locate login form selectors")
    login.add_argument("--url", default=None)
    login.add_argument("--output-dir", default=".")
    login.set_defaults(handler=_crawl_login)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
