from pathlib import Path

from jobboard.config import settings
from jobboard.utils.filesystem import ensure_resume_dir, unique_filename


def store_resume(filename: str | None, content: bytes, resume_dir: Path | None = None) -> str:
    """Write an uploaded resume under a collision-free name. Returns the stored filename."""
    directory = ensure_resume_dir(resume_dir)
    path = directory / unique_filename("resume", filename)
    path.write_bytes(content)
    return path.name


def get_resume_full_path(resume_name: str) -> Path:
    return settings.resume_dir / Path(resume_name).name
