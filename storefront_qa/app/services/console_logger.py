from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from loguru import logger

from storefront_qa.app.core.config import get_settings
from storefront_qa.app.models.harness import TestCaseInfo, TestResultInfo


class ConsoleLoggerReporter:
    """Keeps each test's meaningful stdout and saves it beside its artifacts."""

    def __init__(
        self,
        excluded_substrings: Optional[Sequence[str]] = None,
        file_name: Optional[str] = None,
    ):
        self.settings = get_settings()
        if excluded_substrings is None:
            excluded_substrings = self.settings.console_log.excluded_substrings
        self.excluded_substrings = tuple(excluded_substrings)
        self.file_name = file_name or self.settings.console_log.file_name
        self._test_logs: Dict[str, List[str]] = {}

    def _is_noise(self, text: str) -> bool:
        return any(marker in text for marker in self.excluded_substrings)

    def on_test_begin(self, test: TestCaseInfo) -> None:
        self._test_logs[test.test_id] = []

    def on_stdout(self, chunk: Union[str, bytes], test: Optional[TestCaseInfo] = None) -> None:
        if test is None:
            return
        text = chunk.decode("utf-8", errors="replace") if isinstance(chunk, bytes) else chunk
        clean_text = text.strip()
        if not clean_text or self._is_noise(clean_text):
            return
        self._test_logs.setdefault(test.test_id, []).append(clean_text)

    def get_logs(self, test: TestCaseInfo) -> List[str]:
        return list(self._test_logs.get(test.test_id, []))

    def _find_output_path(self, result: TestResultInfo) -> Optional[Path]:
        for attachment in result.attachments:
            if attachment.path:
                return Path(attachment.path).parent
        return None

    def on_test_end(self, test: TestCaseInfo, result: TestResultInfo) -> Optional[Path]:
        logs = self._test_logs.get(test.test_id, [])
        if not logs or not result.attachments:
            return None

        output_path = self._find_output_path(result)
        if output_path is None:
            return None

        log_file_path = output_path / self.file_name
        try:
            log_file_path.write_text("\n".join(logs), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save console logs: {e}")
            return None
        logger.info(f"Console logs saved to: {log_file_path}")
        return log_file_path
