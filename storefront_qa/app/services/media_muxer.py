import subprocess
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from storefront_qa.app.core.config import MediaConfig, get_settings


class MediaMuxError(Exception):
    pass


def build_merge_command(
    video_path: Path, audio_path: Path, output_path: Path, config: MediaConfig
) -> List[str]:
    # VP8 webm from the browser is re-encoded to H.264 so the mp4 plays everywhere.
    return [
        config.ffmpeg_bin,
        "-i", str(video_path),
        "-i", str(audio_path),
        "-c:v", config.video_codec,
        "-preset", config.preset,
        "-crf", str(config.crf),
        "-c:a", config.audio_codec,
        "-shortest",
        str(output_path),
        "-y",
    ]


def merge_audio_video(
    video_path: Union[str, Path],
    audio_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[MediaConfig] = None,
) -> Path:
    config = config or get_settings().media
    output_path = Path(output_path)
    cmd = build_merge_command(Path(video_path), Path(audio_path), output_path, config)

    logger.info("Merging audio and video...")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise MediaMuxError(f"ffmpeg not found: {config.ffmpeg_bin}") from e

    if result.returncode != 0:
        tail = (result.stderr or result.stdout or "")[-1200:]
        raise MediaMuxError(f"ffmpeg exited with code {result.returncode}: {tail}")

    logger.info(f"Narrated video created: {output_path}")
    return output_path
