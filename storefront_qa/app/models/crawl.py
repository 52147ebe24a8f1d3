from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CrawlReport(BaseModel):
    url: str
    title: str = ""
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    elements: Dict[str, Any] = Field(default_factory=dict)
    selectors: Dict[str, Optional[str]] = Field(default_factory=dict)
    screenshot: Optional[str] = None
    html_dump: Optional[str] = None
