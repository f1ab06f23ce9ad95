"""
Structured logging configuration for the TorqueHub quote renderer.
Import and call setup_logging() once at process startup.
"""
import logging
import logging.handlers
import os
import json
from datetime import datetime, timezone

from torquehub.core.paths import LOG_DIR

# Extra fields callers attach via `extra={...}` that end up in JSON lines
EXTRA_FIELDS = ("token", "order_id", "pages", "photos", "items",
                "url", "reason", "duration_ms", "expired")


class JSONFormatter(logging.Formatter):
    """Structured JSON log lines for machine parsing."""
    def format(self, record):
        entry = {
            "ts": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Readable console format with color."""
    COLORS = {
        "DEBUG": "\033[36m", "INFO": "\033[32m",
        "WARNING": "\033[33m", "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        ts = datetime.now(timezone.utc).strftime("%H:%M:%S")
        line = f"{color}{ts} [{record.levelname[0]}] {record.name}: {record.getMessage()}{self.RESET}"
        if record.exc_info and record.exc_info[0]:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level=None, json_logs=None, log_dir=None):
    """
    Configure logging for the renderer process.

    Args:
        level: Override log level (default: from LOG_LEVEL env or INFO)
        json_logs: Force JSON format (default: on when TORQUEHUB_JSON_LOGS
                   is set or NODE_ENV/APP_ENV says production)
        log_dir: Directory for the rotating file log (default: LOG_DIR)
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if json_logs is None:
        env = (os.environ.get("APP_ENV") or os.environ.get("NODE_ENV") or "").lower()
        json_logs = bool(os.environ.get("TORQUEHUB_JSON_LOGS")) or env == "production"
    log_dir = log_dir or LOG_DIR

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.handlers.clear()

    # Console handler
    console = logging.StreamHandler()
    console.setFormatter(JSONFormatter() if json_logs else HumanFormatter())
    root.addHandler(console)

    # File handler: rotates at 5MB, keeps 5 backups
    try:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, "torquehub.log"),
            maxBytes=5_000_000, backupCount=5,
        )
        fh.setFormatter(JSONFormatter())
        root.addHandler(fh)
    except (OSError, PermissionError):
        pass  # skip file logging if dir not writable

    # Quiet noisy libs
    for name in ("urllib3", "PIL", "reportlab", "pdfminer"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("torquehub").info("Logging initialized", extra={"reason": str(level)})
