"""JSON-lines feedback log on local disk."""

import json
from pathlib import Path

import aiofiles
import structlog

from tandem.config import settings

from .models import FeedbackRecord, PersistResult
from .sink import FeedbackSink

logger = structlog.get_logger(__name__)


class JsonlFeedbackSink(FeedbackSink):
    """Appends one JSON object per line to the completions log.

    The file is opened in append mode for every record, so concurrent
    readers only ever see whole lines.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize sink.

        Args:
            path: Log file path (defaults to settings.paths.completions_log)
        """
        self.path = Path(path or settings.paths.completions_log).expanduser()

    async def append(self, record: FeedbackRecord) -> PersistResult:
        """Append a record as a single JSON line."""
        line = json.dumps(record.to_dict(), ensure_ascii=False) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self.path, "a", encoding="utf-8") as f:
                await f.write(line)
        except OSError as e:
            logger.warning(
                "feedback_append_failed",
                path=str(self.path),
                completion_id=record.completion_id,
                error=str(e),
            )
            return PersistResult.failure(str(e))

        return PersistResult.success()

    async def read_records(self) -> list[FeedbackRecord]:
        """Load every record in the log.

        Malformed lines are skipped with a warning; a missing file yields an
        empty list.
        """
        if not self.path.exists():
            return []

        async with aiofiles.open(self.path, encoding="utf-8") as f:
            content = await f.read()

        records = []
        for lineno, line in enumerate(content.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(FeedbackRecord.from_dict(json.loads(line)))
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(
                    "feedback_log_line_invalid",
                    path=str(self.path),
                    line=lineno,
                    error=str(e),
                )
        return records
