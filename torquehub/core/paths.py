"""
torquehub/core/paths.py: Centralized Path Configuration

Single source of truth for the directories the quote renderer touches.
Every module imports from here instead of reading the environment itself.

Media URLs stored on an order are either absolute http(s) URLs or paths
relative to MEDIA_ROOT (the API process working directory by default,
which is where local uploads land in dev).
"""

import os
import logging

log = logging.getLogger("torquehub.paths")

# ── Project Root ──────────────────────────────────────────────────────────────
_THIS_FILE = os.path.abspath(__file__)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(_THIS_FILE)))

_DEFAULT_DATA_DIR = os.path.join(PROJECT_ROOT, "data")


# ── Resolve DATA_DIR ─────────────────────────────────────────────────────────
# Priority: TORQUEHUB_DATA_DIR env → project data/
def _resolve_data_dir() -> str:
    env_dir = os.environ.get("TORQUEHUB_DATA_DIR", "")
    if env_dir:
        return os.path.abspath(env_dir)
    return _DEFAULT_DATA_DIR


def _resolve_media_root() -> str:
    """Uploads live under the API's working directory unless overridden."""
    env_dir = os.environ.get("TORQUEHUB_MEDIA_ROOT", "")
    if env_dir:
        return os.path.abspath(env_dir)
    return os.getcwd()


def _resolve_timeout() -> float:
    raw = os.environ.get("TORQUEHUB_IMAGE_TIMEOUT", "")
    if not raw:
        return 5.0
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring invalid TORQUEHUB_IMAGE_TIMEOUT=%r, using 5s", raw)
        return 5.0
    return value if value > 0 else 5.0


DATA_DIR = _resolve_data_dir()
LOG_DIR = os.path.join(DATA_DIR, "logs")
MEDIA_ROOT = _resolve_media_root()

# Per-photo network timeout (seconds). A single unreachable image must not
# stall the whole document.
IMAGE_FETCH_TIMEOUT = _resolve_timeout()


def validate_paths() -> dict:
    """Runtime validation: call at startup to catch path issues early.

    Returns:
        {"ok": bool, "errors": [str], "warnings": [str], "resolved": {name: path}}
    """
    result = {"ok": True, "errors": [], "warnings": [], "resolved": {}}

    checks = {
        "PROJECT_ROOT": (PROJECT_ROOT, True),
        "MEDIA_ROOT": (MEDIA_ROOT, True),
        "DATA_DIR": (DATA_DIR, False),
    }

    for name, (path, required) in checks.items():
        result["resolved"][name] = path
        if not os.path.isdir(path):
            if required:
                result["errors"].append(f"{name} not found: {path}")
                result["ok"] = False
            else:
                result["warnings"].append(f"{name} not found: {path}")

    if os.path.isdir(MEDIA_ROOT) and not os.access(MEDIA_ROOT, os.R_OK):
        result["errors"].append(f"MEDIA_ROOT not readable: {MEDIA_ROOT}")
        result["ok"] = False

    result["resolved"]["IMAGE_FETCH_TIMEOUT"] = str(IMAGE_FETCH_TIMEOUT)
    return result
