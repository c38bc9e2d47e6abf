from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from budgetsim.core.money import as_money, to_float, to_money


class AccountID(BaseModel):
    """Identifies one account. Only used as a mapping key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id_val: int = Field(ge=0)

    def __str__(self) -> str:
        return str(self.id_val)


class AccountSpec(BaseModel):
    """How one account's value reacts to transfers and to time passing.

    ``interest`` is an annual rate spread evenly over 365 days. ``out_charge``
    is a fraction of each outgoing transfer taken from the account on top of
    the transfer itself, ``in_charge`` a fraction of each incoming transfer
    withheld from it. None of the rates are range checked: a negative charge
    pays a bonus instead.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    initial_value: Decimal
    interest: float = 0.0
    out_charge: float = 0.0
    in_charge: float = 0.0

    @field_validator("initial_value", mode="before")
    @classmethod
    def _coerce_initial_value(cls, value: object) -> Decimal:
        return as_money(value)  # type: ignore[arg-type]

    def source(self, value: Decimal, out: Decimal) -> Decimal:
        """Value after this account pays ``out`` to another account."""
        return value - to_money(to_float(out) * (1.0 + self.out_charge))

    def sink(self, value: Decimal, in_: Decimal) -> Decimal:
        """Value after this account receives ``in_`` from another account."""
        return value + to_money(to_float(in_) * (1.0 - self.in_charge))

    def update(self, value: Decimal) -> Decimal:
        """Value after one day of interest. Leap years are not adjusted for."""
        return to_money(to_float(value) * (1.0 + (self.interest / 365.0)))


class AccountState(BaseModel):
    """An account's value on a given date."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: Decimal
    date: dt.date
