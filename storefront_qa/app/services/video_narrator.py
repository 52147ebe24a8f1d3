import re
import time
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from loguru import logger

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.models.narration import TestStatus, TestVideoInfo
from storefront_qa.app.services.media_muxer import merge_audio_video

ERROR_CONTEXT_FILE = "error-context.md"
VIDEO_SUFFIX = ".webm"


def generate_narration_script(info: TestVideoInfo) -> str:
    script = [f"Test: {info.test_name}"]

    if info.status == TestStatus.PASSED:
        script.append("Status: Passed successfully")
    elif info.status == TestStatus.FAILED:
        script.append("Status: Failed")
        if info.error:
            script.append(f"Error: {info.error}")

    if info.steps:
        script.append("Test steps:")
        for index, step in enumerate(info.steps, start=1):
            script.append(f"Step {index}: {step.title}")
            if step.error:
                script.append(f"Failed at this step: {step.error}")

    if info.duration_ms:
        script.append(f"Total duration: {info.duration_ms / 1000:.1f} seconds")

    return ". ".join(script)


def find_video_files(test_results_dir: Union[str, Path]) -> List[Path]:
    root = Path(test_results_dir)
    if not root.exists():
        return []
    return sorted(p for p in root.rglob(f"*{VIDEO_SUFFIX}") if p.is_file())


def extract_test_info(video_path: Union[str, Path]) -> TestVideoInfo:
    """Derive name and outcome from the directory the video was recorded in.

    A failed test leaves an ``error-context.md`` next to its video; its first
    line, without markdown heading marks, is used as the error summary.
    """
    directory = Path(video_path).parent
    error: Optional[str] = None

    error_context = directory / ERROR_CONTEXT_FILE
    if error_context.exists():
        first_line = error_context.read_text(encoding="utf-8").split("\n")[0]
        error = re.sub(r"^#+\s*", "", first_line)

    return TestVideoInfo(
        test_name=directory.name.replace("-", " "),
        status=TestStatus.FAILED if error is not None else TestStatus.PASSED,
        error=error,
    )


class VideoNarrator:
    def __init__(
        self,
        synthesizer: Any,
        merge: Callable[[Path, Path, Path], Path] = merge_audio_video,
    ):
        self.settings = get_settings()
        self.synthesizer = synthesizer
        self.merge = merge

    def narrate_video(self, video_path: Path, output_dir: Path) -> Path:
        info = extract_test_info(video_path)
        narration_text = generate_narration_script(info)

        audio_path = output_dir / f"narration-{int(time.time() * 1000)}.wav"
        output_path = output_dir / f"{video_path.parent.name}.mp4"
        try:
            self.synthesizer.synthesize(narration_text, audio_path)
            self.merge(video_path, audio_path, output_path)
        finally:
            audio_path.unlink(missing_ok=True)
        return output_path

    def process_test_videos(
        self,
        test_results_dir: Optional[Union[str, Path]] = None,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> List[Path]:
        results_dir = Path(test_results_dir or self.settings.report.test_results_dir)
        output_dir = Path(output_dir or self.settings.report.narrated_videos_dir)
        logger.info("Starting video narration process...")

        output_dir.mkdir(parents=True, exist_ok=True)

        videos = find_video_files(results_dir)
        if not videos:
            logger.info("No video files found in test results.")
            return []

        logger.info(f"Found {len(videos)} video(s) to process")
        produced = []
        for video_path in videos:
            logger.info(f"Processing: {video_path.name}")
            try:
                output_path = self.narrate_video(video_path, output_dir)
            except Exception as e:
                logger.error(f"Error processing {video_path}: {e}")
                continue
            logger.info(f"Completed: {output_path.name}")
            produced.append(output_path)

        logger.info(f"Narration process completed. Output directory: {output_dir.resolve()}")
        return produced
