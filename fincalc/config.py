"""Loop caps and solver budgets shared by every calculator."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Limits(BaseModel):
    """Named bounds for every iterative loop in the core.

    Each field can be overridden through the app config (FINCALC_<FIELD>).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # schedule loops
    amortization_max_periods: int = Field(5000, ge=1)
    payoff_max_periods: int = Field(1200, ge=1)  # 100 years of monthly payments
    decumulation_max_periods: int = Field(5000, ge=1)
    accumulation_max_periods: int = Field(5000, ge=1)

    # nominal annual rate bisection
    rate_solver_iterations: int = Field(90, ge=1)
    rate_solver_max_expansions: int = Field(30, ge=0)
    rate_bracket_low: float = Field(-0.99, gt=-1.0)
    rate_bracket_high: float = Field(2.0, gt=0)
    rate_bracket_ceiling: float = Field(20.0, gt=0)
    rate_expand_factor: float = Field(1.5, gt=1.0)

    # period count bisection
    length_solver_iterations: int = Field(80, ge=1)
    length_solver_max_expansions: int = Field(30, ge=0)
    length_bracket_high: int = Field(1200, ge=1)
    length_bracket_ceiling: int = Field(100000, ge=1)

    @model_validator(mode="after")
    def ensure_brackets(self) -> "Limits":
        if self.rate_bracket_high <= self.rate_bracket_low:
            raise ValueError("rate_bracket_high must be greater than rate_bracket_low")
        if self.rate_bracket_ceiling < self.rate_bracket_high:
            raise ValueError("rate_bracket_ceiling must be at least rate_bracket_high")
        if self.length_bracket_ceiling < self.length_bracket_high:
            raise ValueError("length_bracket_ceiling must be at least length_bracket_high")
        return self


DEFAULT_LIMITS = Limits()


def limits_from_config(config: Mapping[str, Any]) -> Limits:
    """Build Limits from a Flask-style config mapping (UPPER_CASE keys).

    Unknown keys are ignored; values are validated (and coerced) by pydantic,
    so "12" from an environment variable becomes 12.
    """
    values = {
        name: config[name.upper()]
        for name in Limits.model_fields
        if name.upper() in config
    }
    return Limits.model_validate(values)
