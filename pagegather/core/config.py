"""Process-wide paging configuration.

The values are read once at startup (explicitly via ``configure`` or lazily
from the environment) and treated as read-only afterwards.
"""

from __future__ import annotations

import os
import threading

from pydantic import BaseModel, ConfigDict, Field, model_validator

ENV_PREFIX = "PAGEGATHER_"

# Strava-style provider cap on records per request
DEFAULT_MAX_PAGE_SIZE = 200
DEFAULT_LIST_ALL_PARALLELISM = 10
DEFAULT_MAX_WORKERS = 16


class PagingConfig(BaseModel):
    """Paging limits for the remote provider.

    Attributes:
        max_page_size: Maximum records the provider returns per request
        list_all_parallelism: Number of provider pages fetched per list-all iteration
        max_workers: Upper bound on concurrent fetches in the shared worker pool
        max_chunks: Maximum provider requests one logical page may expand to (None = unlimited)
    """

    max_page_size: int = Field(default=DEFAULT_MAX_PAGE_SIZE, gt=0)
    list_all_parallelism: int = Field(default=DEFAULT_LIST_ALL_PARALLELISM, gt=0)
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, gt=0)
    max_chunks: int | None = Field(default=None, gt=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_max_chunks(self) -> PagingConfig:
        """List-all windows expand to ``list_all_parallelism`` requests and must fit max_chunks."""
        if self.max_chunks is not None and self.max_chunks < self.list_all_parallelism:
            raise ValueError("max_chunks must be >= list_all_parallelism")
        return self

    @property
    def list_all_window(self) -> int:
        """Records requested per list-all iteration."""
        return self.max_page_size * self.list_all_parallelism

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> PagingConfig:
        """Build config from ``PAGEGATHER_*`` environment variables.

        Unset variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls(**values)


_config: PagingConfig | None = None
_lock = threading.Lock()


def get_config() -> PagingConfig:
    """Get the process-wide config, loading it from the environment on first use."""
    global _config
    if _config is None:
        with _lock:
            if _config is None:
                _config = PagingConfig.from_env()
    return _config


def configure(config: PagingConfig | None = None, **overrides: int) -> PagingConfig:
    """Install the process-wide config.

    Meant to be called once at startup, before the first paging call creates
    the shared worker pool.

    Args:
        config: Config to install (defaults to one loaded from the environment)
        **overrides: Field values overriding ``config``

    Returns:
        The installed config
    """
    global _config
    base = config if config is not None else PagingConfig.from_env()
    if overrides:
        base = base.model_copy(update=overrides)
        base = PagingConfig.model_validate(base.model_dump())
    with _lock:
        _config = base
    return base


def reset_config() -> None:
    """Forget the installed config so the next ``get_config`` reloads it."""
    global _config
    with _lock:
        _config = None
