import os
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urlsplit, urlunsplit
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings

SPEECH_KEY_PLACEHOLDER = "YOUR_SPEECH_KEY"


class NarrationTimingConfig(BaseSettings):
    words_per_second: float = 2.5
    period_pause_ms: float = 300
    comma_pause_ms: float = 200
    buffer_multiplier: float = 1.2
    minimum_ms: int = 1500
    rounding_granularity_ms: int = 100
    quick_delay_ms: int = 2000
    long_delay_ms: int = 4000

    class Config:
        env_prefix = "NARRATION_TIMING_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class SpeechConfig(BaseSettings):
    key: Optional[str] = None
    region: Optional[str] = None
    voice: str = "en-US-JennyNeural"

    class Config:
        env_prefix = "SPEECH_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_configured(self) -> bool:
        return bool(self.key) and self.key != SPEECH_KEY_PLACEHOLDER


class ReportConfig(BaseSettings):
    output_dir: str = "playwright-report"
    test_results_dir: str = "test-results"
    narrated_videos_dir: str = "narrated-videos"
    snippet_max_length: int = 150
    max_nodes_per_violation: int = 3

    class Config:
        env_prefix = "REPORT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class ConsoleLogConfig(BaseSettings):
    file_name: str = "console-logs.txt"
    excluded_substrings: List[str] = Field(
        default_factory=lambda: ["[dotenv", "injecting env", "Page URL:", "Page title:"]
    )

    class Config:
        env_prefix = "CONSOLE_LOG_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class MediaConfig(BaseSettings):
    ffmpeg_bin: str = "ffmpeg"
    video_codec: str = "libx264"
    preset: str = "fast"
    crf: int = 22
    audio_codec: str = "aac"

    class Config:
        env_prefix = "MEDIA_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class StorefrontConfig(BaseSettings):
    base_url: str = "https://stage.cuisinart.com"
    username: Optional[str] = None
    password: Optional[str] = None
    timezone: str = "America/New_York"

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def authenticated_url(self, path: str = "") -> str:
        parts = urlsplit(self.base_url.rstrip("/") + path)
        if not self.username:
            return urlunsplit(parts)
        credentials = self.username
        if self.password:
            credentials = f"{credentials}:{self.password}"
        return urlunsplit(parts._replace(netloc=f"{credentials}@{parts.netloc}"))


class LoggingConfig(BaseSettings):
    level: str = "INFO"

    class Config:
        env_prefix = "LOG_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


class Settings(BaseSettings):
    narration_timing: NarrationTimingConfig = Field(default_factory=NarrationTimingConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    console_log: ConsoleLogConfig = Field(default_factory=ConsoleLogConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
    storefront: StorefrontConfig = Field(default_factory=StorefrontConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    project_root: Path = Path(__file__).parent.parent.parent.parent

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        if not env_file:
            return cls()
        # each group reads its own prefix, so the file is handed to every one of them
        groups = {
            name: field.annotation(_env_file=env_file)
            for name, field in cls.model_fields.items()
            if isinstance(field.annotation, type) and issubclass(field.annotation, BaseSettings)
        }
        return cls(_env_file=env_file, **groups)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings(env_file: Optional[str] = None) -> Settings:
    return Settings.from_env(env_file)


def format_session_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY-MM-DD_h-MMam`` (12 hour clock)."""
    hours = moment.hour % 12 or 12
    suffix = "pm" if moment.hour >= 12 else "am"
    return f"{moment:%Y-%m-%d}_{hours}-{moment:%M}{suffix}"


def session_timestamp(timezone: Optional[str] = None) -> str:
    """Return the run-grouping timestamp, shared by every worker of a run.

    The first caller stores it in ``TEST_SESSION_TIMESTAMP`` so that
    subprocesses started afterwards reuse the same value.
    """
    existing = os.environ.get("TEST_SESSION_TIMESTAMP")
    if existing:
        return existing
    zone = ZoneInfo(timezone or get_settings().storefront.timezone)
    stamp = format_session_timestamp(datetime.now(zone))
    os.environ["TEST_SESSION_TIMESTAMP"] = stamp
    return stamp


def session_dir(base: Union[str, Path], stamp: Optional[str] = None) -> Path:
    """Return ``base/session_<stamp>``, or ``base`` when it already is that directory."""
    base = Path(base)
    name = f"session_{stamp or session_timestamp()}"
    if base.name == name:
        return base
    return base / name
