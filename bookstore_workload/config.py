"""
Configuration settings for the bookstore workload harness.

Uses Pydantic Settings to load the sweep size, the interaction mix and logging
options from environment variables (or a `.env` file).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookstore_workload.workloads.configuration import CopiesOrdering, WorkloadParameters


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    log_worker_level: Optional[str] = Field(None, alias="LOG_WORKER_LEVEL")

    # Sweep
    max_concurrency: int = Field(10, ge=1, alias="WORKLOAD_MAX_CONCURRENCY")

    # Interaction mix and sizing
    percent_rare: float = Field(10.0, alias="WORKLOAD_PERCENT_RARE")
    percent_frequent: float = Field(30.0, alias="WORKLOAD_PERCENT_FREQUENT")
    warm_up_runs: int = Field(100, alias="WORKLOAD_WARMUP_RUNS")
    actual_runs: int = Field(500, alias="WORKLOAD_ACTUAL_RUNS")
    books_to_add: int = Field(5, alias="WORKLOAD_BOOKS_TO_ADD")
    books_with_least_copies: int = Field(5, alias="WORKLOAD_BOOKS_WITH_LEAST_COPIES")
    copies_to_buy: int = Field(1, alias="WORKLOAD_COPIES_TO_BUY")
    editor_picks_to_get: int = Field(10, alias="WORKLOAD_EDITOR_PICKS_TO_GET")
    copies_ordering: CopiesOrdering = Field("lexicographic", alias="WORKLOAD_COPIES_ORDERING")
    seed: Optional[int] = Field(None, alias="WORKLOAD_SEED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def workload_parameters(self, **overrides: object) -> WorkloadParameters:
        """
        Build validated worker parameters from these settings.

        Keyword overrides use `WorkloadParameters` field names and win over the
        environment values.
        """
        values = {
            "percent_rare_stock_manager_interaction": self.percent_rare,
            "percent_frequent_stock_manager_interaction": self.percent_frequent,
            "warm_up_runs": self.warm_up_runs,
            "actual_runs": self.actual_runs,
            "num_books_to_add": self.books_to_add,
            "num_books_with_least_copies": self.books_with_least_copies,
            "num_book_copies_to_buy": self.copies_to_buy,
            "num_editor_picks_to_get": self.editor_picks_to_get,
            "copies_ordering": self.copies_ordering,
            "seed": self.seed,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return WorkloadParameters(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
