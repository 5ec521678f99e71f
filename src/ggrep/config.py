"""Configuration for ggrep."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    git_executable: str = "git"
    repo_dir: Path = field(default_factory=Path.cwd)
    cache_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "ggrep")
    poll_interval: float = 0.05
    legend_visible: bool = True
    log_level: str = "WARNING"

    @property
    def log_path(self) -> Path:
        return self.cache_dir / "ggrep.log"
