# utils/env_util.py
import os


def env_list(key: str) -> list[str]:
    """
    Read a comma-separated list from an env var, e.g. TO_EMAIL=a@x.hr,b@x.hr
    Returns [] if not set.
    """
    raw = os.getenv(key, "").strip()
    if not raw:
        return []
    return [e.strip() for e in raw.split(",") if e.strip()]


def env_str(key: str, default=None):
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()
