"""Fixed-budget bisection for inverses without a closed form.

Both solvers assume ``f`` is monotonic increasing. They run a fixed number of
halvings rather than an epsilon loop so the worst-case cost is known up
front, and they never raise: an unbracketable target comes back as the
nearest boundary with a ``below_range`` / ``above_range`` status.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class RootStatus(str, Enum):
    CONVERGED = "converged"
    BELOW_RANGE = "below_range"
    ABOVE_RANGE = "above_range"


@dataclass(frozen=True)
class RootResult:
    value: float
    status: RootStatus
    iterations: int = 0
    expansions: int = 0

    @property
    def converged(self) -> bool:
        return self.status == RootStatus.CONVERGED


def _gap(f: Callable[[float], float], x: float, target: float) -> float:
    value = f(x) - target
    # nan means "overshot into overflow" for an increasing f
    return math.inf if math.isnan(value) else value


def bisect(
    f: Callable[[float], float],
    target: float,
    lo: float,
    hi: float,
    *,
    iterations: int = 90,
    max_expansions: int = 30,
    ceiling: float = 20.0,
    expand_factor: float = 1.5,
) -> RootResult:
    """Find x in [lo, hi] with f(x) == target, growing ``hi`` toward ``ceiling`` if needed."""
    f_lo = _gap(f, lo, target)
    f_hi = _gap(f, hi, target)

    expansions = 0
    while f_hi < 0 and hi < ceiling and expansions < max_expansions:
        hi = min(hi * expand_factor, ceiling)
        f_hi = _gap(f, hi, target)
        expansions += 1

    if f_lo > 0:
        logger.debug("target %s below bracket floor %s", target, lo)
        return RootResult(lo, RootStatus.BELOW_RANGE, 0, expansions)
    if f_hi < 0:
        logger.debug("target %s above bracket ceiling %s after %d expansions", target, hi, expansions)
        return RootResult(hi, RootStatus.ABOVE_RANGE, 0, expansions)

    for iteration in range(1, iterations + 1):
        mid = (lo + hi) / 2
        f_mid = _gap(f, mid, target)
        if f_mid == 0:
            return RootResult(mid, RootStatus.CONVERGED, iteration, expansions)
        if f_mid > 0:
            hi = mid
        else:
            lo = mid
    return RootResult((lo + hi) / 2, RootStatus.CONVERGED, iterations, expansions)


def bisect_integer(
    f: Callable[[int], float],
    target: float,
    lo: int = 0,
    hi: int = 1200,
    *,
    iterations: int = 80,
    max_expansions: int = 30,
    ceiling: int = 100000,
    expand_factor: int = 2,
) -> RootResult:
    """Smallest integer n in [lo, hi] with f(n) >= target."""
    expansions = 0
    while hi < ceiling and expansions < max_expansions and _gap(f, hi, target) < 0:
        hi *= expand_factor
        expansions += 1

    if _gap(f, lo, target) >= 0:
        return RootResult(lo, RootStatus.CONVERGED, 0, expansions)
    if _gap(f, hi, target) < 0:
        logger.debug("target %s not reached within %d periods", target, hi)
        return RootResult(hi, RootStatus.ABOVE_RANGE, 0, expansions)

    done = 0
    for done in range(1, iterations + 1):
        if lo >= hi:
            break
        mid = (lo + hi) // 2
        if _gap(f, mid, target) >= 0:
            hi = mid
        else:
            lo = mid + 1
    return RootResult(hi, RootStatus.CONVERGED, done, expansions)
