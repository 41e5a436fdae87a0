"""Local machine identifier sent to the backend for license binding."""
from __future__ import annotations

import hashlib
import os


def generate_machine_id() -> str:
    """Return a stable 16 hex char id derived from hostname and user name."""
    hostname = os.getenv("COMPUTERNAME") or os.getenv("HOSTNAME") or "unknown"
    user = os.getenv("USER") or os.getenv("USERNAME") or "unknown"
    combined = f"{hostname}-{user}"
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()[:16]
