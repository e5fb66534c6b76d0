"""Roll a period ledger into yearly buckets."""

from __future__ import annotations

from typing import Iterable, List

from fincalc.domain.ledger import AnnualBucket, PeriodRow


def annual_buckets(rows: Iterable[PeriodRow], periods_per_year: int = 12) -> List[AnnualBucket]:
    """Sum each year's rows (year = ceil(index / periods_per_year)).

    A partial final year keeps whatever periods it has. Values are not
    rounded.
    """
    per_year = max(1, int(periods_per_year))
    buckets: List[AnnualBucket] = []

    for row in rows:
        year = -(-row.index // per_year)
        if buckets and buckets[-1].year == year:
            last = buckets[-1]
            buckets[-1] = AnnualBucket(
                year=year,
                amount=last.amount + row.amount,
                interest=last.interest + row.interest,
                principal=last.principal + row.principal,
                ending_balance=row.balance,
                periods=last.periods + 1,
            )
        else:
            buckets.append(
                AnnualBucket(
                    year=year,
                    amount=row.amount,
                    interest=row.interest,
                    principal=row.principal,
                    ending_balance=row.balance,
                    periods=1,
                )
            )

    return buckets
