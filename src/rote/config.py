from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_ROTEFILE = os.environ.get("ROTE_FILE", "Rotefile")
LOG_LEVEL = os.environ.get("ROTE_LOG_LEVEL", "")


def _timeout_from_env() -> Optional[float]:
    raw = os.environ.get("ROTE_TIMEOUT", "").strip()
    if not raw:
        return None
    value = float(raw)
    # 0 or negative means "wait forever", same as unset
    return value if value > 0 else None


@dataclass
class Settings:
    """Invocation settings. Environment supplies defaults, CLI flags override."""
    rotefile: str = DEFAULT_ROTEFILE
    directory: Optional[str] = None
    dry_run: bool = False
    quiet: bool = False
    verbosity: int = 0
    debug: bool = False
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(rotefile=DEFAULT_ROTEFILE, timeout=_timeout_from_env())
