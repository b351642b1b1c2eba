"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_INDEX_DIR = Path("data/index")


@dataclass(slots=True)
class AppConfig:
    index_dir: Path = DEFAULT_INDEX_DIR
    prefix: str = "!"
    doc_command: str = "docs"
    functions_command: str = "getfuncs"
    types_command: str = "gettypes"
    bot_user_id: str = "docso"
    idle_timeout: float = 600.0
    sweep_interval: float = 60.0
    owner_only: bool = False
    max_messages: int = 1000
    previous_emoji: str = "⬅️"
    next_emoji: str = "➡️"
    destroy_emoji: str = "🗑️"

    def resolve_index_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.index_dir).is_absolute() or base_dir is None:
            return Path(self.index_dir)
        return base_dir / self.index_dir


def locate_index_dir(index_dir: Path | None, base_dir: Path | None = None) -> Path:
    """Resolve an optional index directory against ``base_dir`` (the working directory by default)."""
    config = AppConfig(index_dir=index_dir if index_dir is not None else DEFAULT_INDEX_DIR)
    return config.resolve_index_dir(base_dir if base_dir is not None else Path.cwd())
