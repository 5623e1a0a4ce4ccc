"""Application configuration for rfitrainer."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self


@dataclass
class TrainerConfig:
    """Defaults for a training session."""

    table_size: int = 6
    strategy: str = "GTO"
    strategy_file: Path | None = None


@dataclass
class ScoringConfig:
    """Position-score cut-offs for grading a decision.

    A score above ``correct_threshold`` counts as correct; above
    ``partial_threshold`` (but not correct) counts as close.
    """

    correct_threshold: float = 0.9
    partial_threshold: float = 0.5


@dataclass
class StorageConfig:
    """Where sessions and player notes are kept."""

    data_dir: Path = field(default_factory=lambda: Path.home() / ".local" / "share" / "rfitrainer")

    @property
    def session_file(self) -> Path:
        return self.data_dir / "current_session.json"

    @property
    def notes_file(self) -> Path:
        return self.data_dir / "player_notes.json"


@dataclass
class Config:
    """Application configuration."""

    trainer: TrainerConfig = field(default_factory=TrainerConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def load(cls) -> Self:
        """Load config from file, falling back to defaults."""
        config_paths = [
            Path.cwd() / "rfitrainer.toml",
            Path.cwd() / ".rfitrainer.toml",
            Path.home() / ".config" / "rfitrainer" / "config.toml",
            Path.home() / ".rfitrainer.toml",
        ]

        for path in config_paths:
            if path.exists():
                return cls._from_file(path)

        return cls()

    @classmethod
    def _from_file(cls, path: Path) -> Self:
        """Load config from a TOML file."""
        with open(path, "rb") as f:
            data = tomllib.load(f)

        trainer_data = data.get("trainer", {})
        strategy_file = trainer_data.get("strategy_file")
        trainer = TrainerConfig(
            table_size=trainer_data.get("table_size", 6),
            strategy=trainer_data.get("strategy", "GTO"),
            strategy_file=Path(strategy_file).expanduser() if strategy_file else None,
        )

        scoring_data = data.get("scoring", {})
        scoring = ScoringConfig(
            correct_threshold=scoring_data.get("correct_threshold", 0.9),
            partial_threshold=scoring_data.get("partial_threshold", 0.5),
        )

        storage_data = data.get("storage", {})
        storage = StorageConfig()
        if "data_dir" in storage_data:
            storage = StorageConfig(data_dir=Path(storage_data["data_dir"]).expanduser())

        return cls(trainer=trainer, scoring=scoring, storage=storage)


# Global config instance (loaded lazily)
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config
