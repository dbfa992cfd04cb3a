"""
Per-worker workload configuration.

`WorkloadParameters` holds the tunables and validates them eagerly: a bad value
is a precondition violation and raises `pydantic.ValidationError` at
construction instead of being coerced. `WorkloadConfiguration` bundles the
parameters with the collaborators a worker talks to.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from bookstore_workload.store.abstract import BookStore, StockManager
from bookstore_workload.workloads.generator import BookSetGenerator

CopiesOrdering = Literal["lexicographic", "numeric"]


class WorkloadParameters(BaseModel):
    """
    Interaction mix and sizing of one worker run.

    The two stock manager percentages are shares of 100; whatever they leave
    over is the share of the customer purchase interaction.
    """

    percent_rare_stock_manager_interaction: float = Field(10.0, ge=0, le=100)
    percent_frequent_stock_manager_interaction: float = Field(30.0, ge=0, le=100)
    warm_up_runs: int = Field(100, ge=0)
    actual_runs: int = Field(500, ge=0)
    num_books_to_add: int = Field(5, ge=0)
    num_books_with_least_copies: int = Field(5, ge=0)
    num_book_copies_to_buy: int = Field(1, ge=0)
    num_editor_picks_to_get: int = Field(10, ge=1)
    copies_ordering: CopiesOrdering = Field(
        "lexicographic",
        description="How replenishment ranks books by stock: by the decimal string or by value.",
    )
    seed: Optional[int] = Field(None, description="Base seed for worker RNGs.")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_interaction_mix(self) -> "WorkloadParameters":
        total = (
            self.percent_rare_stock_manager_interaction
            + self.percent_frequent_stock_manager_interaction
        )
        if total > 100:
            raise ValueError(
                "percent_rare_stock_manager_interaction + "
                f"percent_frequent_stock_manager_interaction must be <= 100, got {total}"
            )
        return self

    @property
    def percent_frequent_bookstore_interaction(self) -> float:
        return (
            100.0
            - self.percent_rare_stock_manager_interaction
            - self.percent_frequent_stock_manager_interaction
        )


@dataclass(frozen=True)
class WorkloadConfiguration:
    """Everything one worker needs; read-only for the worker's lifetime."""

    parameters: WorkloadParameters
    generator: BookSetGenerator
    bookstore: BookStore
    stock_manager: StockManager


__all__ = ["CopiesOrdering", "WorkloadConfiguration", "WorkloadParameters"]
