from datetime import datetime, timezone


def utcnow() -> str:
    # Microseconds keep "newest first" ordering stable for rapid writes.
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
