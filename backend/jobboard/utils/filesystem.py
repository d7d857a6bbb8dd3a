import secrets
import time
from pathlib import Path

from jobboard.config import settings


def ensure_resume_dir(resume_dir: Path | None = None) -> Path:
    path = resume_dir or settings.resume_dir
    path.mkdir(parents=True, exist_ok=True)
    return path


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    return "".join(c if c in keep else "_" for c in name)


def unique_filename(prefix: str, original_name: str | None) -> str:
    """``<prefix>-<millis>-<random><ext>``, keeping the original extension."""
    suffix = Path(sanitize_filename(original_name or "")).suffix.lower()
    stamp = int(time.time() * 1000)
    return f"{prefix}-{stamp}-{secrets.randbelow(10**9)}{suffix}"
