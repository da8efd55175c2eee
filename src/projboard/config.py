"""Configuration for projboard."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    cache_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "projboard")
    api_base_url: str = ""
    items_per_page: int = 10
    request_timeout: float = 20.0

    @property
    def db_path(self) -> Path:
        return self.cache_dir / "projects.db"

    @property
    def uses_remote_api(self) -> bool:
        return bool(self.api_base_url.strip())
