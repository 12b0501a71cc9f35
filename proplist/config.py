"""Configuration management for proplist."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from proplist.exceptions import ConfigurationError


@dataclass
class ImportConfig:
    """Spreadsheet import configuration."""

    batch_size: int = 5
    batch_delay_seconds: float = 0.5
    preview_rows: int = 5

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ConfigurationError(f"batch_size must be positive, got {self.batch_size}")
        if self.batch_delay_seconds < 0:
            raise ConfigurationError(
                f"batch_delay_seconds must not be negative, got {self.batch_delay_seconds}"
            )


@dataclass
class ExportConfig:
    """Spreadsheet export configuration."""

    output_dir: Path = field(default_factory=lambda: Path("."))
    sheet_name: str = "Properties"
    template_sheet_name: str = "Properties Template"


@dataclass
class StoreConfig:
    """Record store configuration."""

    path: Path = field(default_factory=lambda: Path("properties.json"))


@dataclass
class ProplistConfig:
    """Main configuration for proplist."""

    imports: ImportConfig = field(default_factory=ImportConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "ProplistConfig":
        """Create config from environment variables."""
        try:
            imports = ImportConfig(
                batch_size=int(os.getenv("PROPLIST_BATCH_SIZE", "5")),
                batch_delay_seconds=float(os.getenv("PROPLIST_BATCH_DELAY", "0.5")),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid import settings: {exc}") from exc

        export = ExportConfig(
            output_dir=Path(os.getenv("PROPLIST_OUTPUT_DIR", ".")),
        )

        store = StoreConfig(
            path=Path(os.getenv("PROPLIST_STORE_PATH", "properties.json")),
        )

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            imports=imports,
            export=export,
            store=store,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
