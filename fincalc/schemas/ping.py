"""Pydantic schema for the ping endpoint."""

from typing import List

from pydantic import BaseModel


class PingResponse(BaseModel):
    message: str
    calculators: List[str] = []
