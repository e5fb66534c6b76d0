"""Shared pieces of the calculator contracts."""

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fincalc.domain.ledger import AnnualBucket, PeriodRow, Schedule


class CalcRequest(BaseModel):
    """Base for every request: unknown fields and nan/inf are rejected."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    row_limit: Optional[int] = Field(
        None,
        ge=0,
        description="Return at most this many period rows. Totals always cover the full schedule.",
    )


class PeriodRowOut(BaseModel):
    period: int = Field(..., ge=1)
    amount: float
    interest: float
    principal: float
    balance: float


class AnnualRowOut(BaseModel):
    year: int = Field(..., ge=1)
    amount: float
    interest: float
    principal: float
    ending_balance: float


class ScheduleTotals(BaseModel):
    periods: int = Field(..., ge=0)
    total_interest: float
    total_principal: float
    total_paid: float
    final_payment: float
    ending_balance: float


def money(value: float) -> float:
    return round(value, 2)


def period_rows(rows: Iterable[PeriodRow], limit: Optional[int] = None) -> List[PeriodRowOut]:
    out: List[PeriodRowOut] = []
    for row in rows:
        if limit is not None and len(out) >= limit:
            break
        out.append(
            PeriodRowOut(
                period=row.index,
                amount=money(row.amount),
                interest=money(row.interest),
                principal=money(row.principal),
                balance=money(row.balance),
            )
        )
    return out


def annual_rows(buckets: Iterable[AnnualBucket]) -> List[AnnualRowOut]:
    return [
        AnnualRowOut(
            year=bucket.year,
            amount=money(bucket.amount),
            interest=money(bucket.interest),
            principal=money(bucket.principal),
            ending_balance=money(bucket.ending_balance),
        )
        for bucket in buckets
    ]


def schedule_totals(schedule: Schedule) -> ScheduleTotals:
    return ScheduleTotals(
        periods=schedule.period_count,
        total_interest=money(schedule.total_interest),
        total_principal=money(schedule.total_principal),
        total_paid=money(schedule.total_paid),
        final_payment=money(schedule.final_payment),
        ending_balance=money(schedule.ending_balance),
    )
