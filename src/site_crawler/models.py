"""Data models for site-crawler."""

from enum import Enum
from typing import Optional, List, Tuple, Any
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class ErrorKind(str, Enum):
    """Kinds of per-page failures."""
    NETWORK = "network"
    HTTP = "http"
    BODY_READ = "body_read"
    PARSE = "parse"
    SINK = "sink"


class DepthMode(str, Enum):
    """How the phrase crawler measures depth."""
    WAVE = "wave"        # one global counter per run
    PER_URL = "per_url"  # graph distance carried in each frontier entry


class BrowserProfile(str, Enum):
    """Browser profiles for impersonation."""
    CHROME = "chrome120"
    FIREFOX = "firefox120"
    SAFARI = "safari17_0"
    EDGE = "edge120"


class PageError(BaseModel):
    """A failure that stopped expansion from one page."""
    url: str
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    timestamp: datetime = Field(default_factory=datetime.now)

    def format_line(self) -> str:
        """Render as a single human-readable log line."""
        line = f"{self.timestamp.isoformat(timespec='seconds')} [{self.kind.value}] {self.url}: {self.message}"
        if self.status_code is not None:
            line += f" (status {self.status_code})"
        return line


class ScraperConfig(BaseModel):
    """HTTP and politeness settings."""
    timeout: int = 30
    verify_ssl: bool = True
    browser_profile: BrowserProfile = BrowserProfile.CHROME
    user_agents: List[str] = Field(default_factory=lambda: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 14_6 like Mac OS X) AppleWebKit/605.1.15"
    ])
    politeness_delay: Tuple[float, float] = (2.0, 5.0)  # seconds, after a full run

    model_config = ConfigDict(use_enum_values=True)


class TraversalConfig(BaseModel):
    """Settings fixed for the lifetime of one traversal run."""
    follow_links: bool = True
    max_depth: int = Field(default=3, ge=0)
    user_agent: Optional[str] = None
    depth_mode: DepthMode = DepthMode.WAVE
    allowed_domains: Optional[List[str]] = None
    max_pages: int = -1  # -1 for unlimited

    model_config = ConfigDict(frozen=True)

    def with_updates(self, **changes: Any) -> "TraversalConfig":
        """Return a validated copy with the given fields replaced."""
        return TraversalConfig(**{**self.model_dump(), **changes})


class SinkConfig(BaseModel):
    """Where and what the content sink writes."""
    output_dir: Path = Path("./scraped_data")
    error_log: Path = Path("./error.log")
    download_media: bool = True
    scan_emails: bool = True
    js_keywords: List[str] = Field(default_factory=lambda: ["apiKey", "token"])
    save_external_scripts: bool = False
    scripts_dir: Path = Path("./scraped_js")
