"""Ping utility used by the API health-check."""

from typing import List

CALCULATORS = (
    "amortization",
    "payment",
    "investment",
    "retirement/nest-egg",
    "retirement/savings-needed",
    "retirement/withdrawal",
    "retirement/payout",
    "loan",
    "mortgage",
    "auto-loan",
    "interest",
)


def get_ping_message() -> str:
    """Return a static ping message."""
    return "pong"


def list_calculators() -> List[str]:
    """Calculator endpoints served under /api/calc."""
    return list(CALCULATORS)
