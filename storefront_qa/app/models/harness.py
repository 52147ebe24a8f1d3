from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront_qa.app.models.narration import TestStatus

VIDEO_ATTACHMENT_NAME = "video"
VIDEO_CONTENT_TYPE = "video/webm"


class Attachment(BaseModel):
    name: str
    content_type: str = "application/octet-stream"
    path: Optional[Path] = None

    @property
    def is_video(self) -> bool:
        return self.name == VIDEO_ATTACHMENT_NAME or self.content_type == VIDEO_CONTENT_TYPE


class TestCaseInfo(BaseModel):
    __test__ = False

    title: str
    parent_title: str = ""

    @property
    def test_id(self) -> str:
        return f"{self.parent_title}:{self.title}"


class TestResultInfo(BaseModel):
    __test__ = False

    status: TestStatus = TestStatus.PASSED
    attachments: List[Attachment] = Field(default_factory=list)
    retry: int = 0
    duration_ms: float = 0.0


class RunResult(BaseModel):
    status: str = "passed"
