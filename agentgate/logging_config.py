import datetime
import logging
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .settings import settings


_LOGGING_CONFIGURED = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
LOG_FILE_PREFIX = "agentgate"
LOG_BACKUP_DAYS = 7

# Header names whose values never reach the log files.
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "x-goog-api-key"})
REDACTED = "***REDACTED***"


class LocalTimezoneFormatter(logging.Formatter):
    """
    Formats timestamps in LOG_TIMEZONE, or system local time when it is
    unset or unknown.
    """

    def __init__(self, fmt: str = LOG_FORMAT, *, timezone_name: str | None = None):
        super().__init__(fmt)
        self._tzinfo: datetime.tzinfo | None = None
        if timezone_name:
            try:
                self._tzinfo = ZoneInfo(timezone_name)
            except ZoneInfoNotFoundError:
                self._tzinfo = None

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.datetime.fromtimestamp(record.created, tz=self._tzinfo).astimezone(
            self._tzinfo
        )
        return dt.strftime(datefmt) if datefmt else dt.isoformat(timespec="milliseconds")


class DailyFileHandler(logging.FileHandler):
    """
    Writes to <log_dir>/agentgate-YYYY-MM-DD.log and switches files at
    midnight. Only the newest `backup_count` day files are kept.
    """

    def __init__(self, log_dir: Path, backup_count: int = LOG_BACKUP_DAYS) -> None:
        self.log_dir = Path(log_dir)
        self.backup_count = backup_count
        self._day = datetime.date.today()
        self.log_dir.mkdir(parents=True, exist_ok=True)
        super().__init__(self._path_for(self._day), encoding="utf-8", delay=False)
        self._prune()

    def _path_for(self, day: datetime.date) -> Path:
        return self.log_dir / f"{LOG_FILE_PREFIX}-{day.isoformat()}.log"

    def _prune(self) -> None:
        day_files = sorted(self.log_dir.glob(f"{LOG_FILE_PREFIX}-*.log"))
        for stale in day_files[: max(0, len(day_files) - self.backup_count)]:
            stale.unlink(missing_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        today = datetime.date.today()
        if today != self._day:
            self.acquire()
            try:
                self._day = today
                if self.stream:
                    self.stream.close()
                self.baseFilename = str(self._path_for(today).resolve())
                self.stream = self._open()
                self._prune()
            finally:
                self.release()
        super().emit(record)


def redact_headers(headers) -> dict[str, str]:
    """
    Copy request headers into a plain dict with credentials masked.
    """
    return {
        key: REDACTED if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def setup_logging() -> None:
    """
    Configure application logging once per process.

    agentgate records go to a daily file under LOG_DIR; every record,
    uvicorn's included, goes to the console.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    formatter = LocalTimezoneFormatter(timezone_name=settings.log_timezone)

    file_handler = DailyFileHandler(Path(settings.log_dir))
    file_handler.setFormatter(formatter)

    app_logger = logging.getLogger(LOG_FILE_PREFIX)
    app_logger.setLevel(level)
    app_logger.addHandler(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not any(type(h) is logging.StreamHandler for h in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    _LOGGING_CONFIGURED = True


logger = logging.getLogger("agentgate")
