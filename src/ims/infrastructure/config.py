"""Runtime settings for the inventory manager.

Defaults can be overridden through environment variables so the same
install can point at different data files without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ims.domain.repository.product_repository import DEFAULT_RESTOCK_THRESHOLD

DEFAULT_DATA_FILE = "data.csv"
DEFAULT_LOG_FILE = "log.txt"

ENV_DATA_FILE = "IMS_DATA_FILE"
ENV_LOG_FILE = "IMS_LOG_FILE"
ENV_RESTOCK_THRESHOLD = "IMS_RESTOCK_THRESHOLD"


class ConfigurationError(Exception):
    """Raised when a setting is missing or invalid."""


@dataclass(frozen=True)
class Settings:
    data_file: Path = Path(DEFAULT_DATA_FILE)
    log_file: Path = Path(DEFAULT_LOG_FILE)
    restock_threshold: int = DEFAULT_RESTOCK_THRESHOLD

    def __post_init__(self) -> None:
        if self.restock_threshold < 0:
            raise ConfigurationError(
                f"Restock threshold cannot be negative, got {self.restock_threshold}"
            )

    @classmethod
    def from_env(cls) -> Settings:
        raw_threshold = os.environ.get(ENV_RESTOCK_THRESHOLD)
        threshold = DEFAULT_RESTOCK_THRESHOLD
        if raw_threshold:
            try:
                threshold = int(raw_threshold)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_RESTOCK_THRESHOLD} must be an integer, got {raw_threshold!r}"
                ) from None

        return cls(
            data_file=Path(os.environ.get(ENV_DATA_FILE) or DEFAULT_DATA_FILE),
            log_file=Path(os.environ.get(ENV_LOG_FILE) or DEFAULT_LOG_FILE),
            restock_threshold=threshold,
        )
