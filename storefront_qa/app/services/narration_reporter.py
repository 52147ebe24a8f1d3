from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from loguru import logger

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.models.harness import RunResult, TestCaseInfo, TestResultInfo
from storefront_qa.app.services.speech_synthesis import AzureSpeechSynthesizer
from storefront_qa.app.services.video_narrator import VideoNarrator


def _default_narrator() -> VideoNarrator:
    return VideoNarrator(synthesizer=AzureSpeechSynthesizer())


class NarrationReporter:
    """Narrates recorded videos once the whole run has finished.

    Narration is optional: without recorded videos or speech credentials the
    run ends normally and nothing is produced.
    """

    def __init__(
        self,
        narrator_factory: Optional[Callable[[], Any]] = None,
        results_dir: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ):
        self.settings = get_settings()
        self.narrator_factory = narrator_factory or _default_narrator
        self.results_dir = results_dir or self.settings.report.test_results_dir
        self.output_dir = output_dir or self.settings.report.narrated_videos_dir
        self.has_videos = False

    def on_begin(self) -> None:
        logger.info("Narration Reporter: Monitoring test execution...")

    def on_test_end(self, test: TestCaseInfo, result: TestResultInfo) -> None:
        if any(attachment.is_video for attachment in result.attachments):
            self.has_videos = True

    def on_end(self, result: Optional[RunResult] = None) -> List:
        if not self.has_videos:
            logger.info("Narration Reporter: No videos recorded, skipping narration.")
            return []

        if not self.settings.speech.is_configured:
            logger.warning("Narration Reporter: SPEECH_KEY not configured. Skipping narration.")
            logger.warning("To enable narration, set SPEECH_KEY=your_azure_speech_key")
            logger.warning("and SPEECH_REGION=your_region (e.g., eastus)")
            return []

        logger.info("Narration Reporter: Generating narrated videos...")
        try:
            narrator = self.narrator_factory()
            produced = narrator.process_test_videos(self.results_dir, self.output_dir)
        except Exception as e:
            logger.error(f"Narration Reporter: Failed to generate narrated videos: {e}")
            return []

        logger.info("Narration Reporter: Video narration complete!")
        return produced
