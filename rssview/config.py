"""
Runtime configuration for rssview.

Values come from environment variables, optionally loaded from a .env file.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


ROOT_DIR = Path(__file__).resolve().parent.parent
DEFAULT_FRONTEND_DIR = ROOT_DIR / "frontend"


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    value = float(raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass
class Settings:
    """Server and pipeline settings"""
    host: str = "127.0.0.1"
    port: int = 8080
    workers: int = 1
    log_level: str = "info"
    # None leaves the HTTP client's own default in place
    fetch_timeout: Optional[float] = None
    frontend_dir: Path = field(default_factory=lambda: DEFAULT_FRONTEND_DIR)

    @property
    def templates_dir(self) -> Path:
        return self.frontend_dir / "templates"

    @property
    def static_dir(self) -> Path:
        return self.frontend_dir / "static"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from RSSVIEW_* environment variables."""
        load_dotenv(env_file or ROOT_DIR / ".env")
        return cls(
            host=os.getenv("RSSVIEW_HOST", "127.0.0.1"),
            port=int(os.getenv("RSSVIEW_PORT", "8080")),
            workers=int(os.getenv("RSSVIEW_WORKERS", "1")),
            log_level=os.getenv("RSSVIEW_LOG_LEVEL", "info").lower(),
            fetch_timeout=_optional_float("RSSVIEW_FETCH_TIMEOUT"),
            frontend_dir=Path(os.getenv("RSSVIEW_FRONTEND_DIR") or DEFAULT_FRONTEND_DIR),
        )
