"""Booking Schemas — Pydantic models for booking commands.

Invariants:
    - BookingCreate carries no customer fields: the customer is the session user
    - BookingAdvance.status is a free string; unknown labels are rejected by core
"""

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    worker_id: str = Field(min_length=1)
    date: str = Field(min_length=1, max_length=40)
    time: str = Field(min_length=1, max_length=40)
    location: str | None = Field(None, max_length=200)
    problem_description: str | None = Field(None, max_length=5000)


class BookingAdvance(BaseModel):
    status: str = Field(min_length=1)
