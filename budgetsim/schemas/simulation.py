"""Data contracts for simulation documents and API responses."""

from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from budgetsim.domain.transactions import DateInterval


class AccountDocument(BaseModel):
    """One account as written in a specification file or request."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(ge=0)
    name: str
    initialValue: str = Field(description='Currency text such as "£1000.00".')
    interest: float = 0.0
    outCharge: float = 0.0
    inCharge: float = 0.0


class TransactionDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: str
    source: int = Field(ge=0)
    sink: int = Field(ge=0)
    start: dt.date
    interval: Optional[DateInterval] = None
    end: Optional[dt.date] = None

    @model_validator(mode="after")
    def ensure_validity(self) -> "TransactionDocument":
        if self.end is not None and self.interval is None:
            raise ValueError("end requires an interval")
        return self


class SimulationDocument(BaseModel):
    """Accounts, transactions and start date of a simulation."""

    model_config = ConfigDict(extra="forbid")

    start: dt.date
    accounts: List[AccountDocument] = Field(min_length=1)
    transactions: List[TransactionDocument] = Field(default_factory=list)


class SimulationRequest(SimulationDocument):
    days: Optional[int] = None


class AccountSummary(BaseModel):
    id: int
    name: str


class DayRow(BaseModel):
    date: dt.date
    values: Dict[str, str]


class TransactionSchedule(BaseModel):
    """Dates a transaction fires on within the simulated window."""

    source: int
    sink: int
    value: str
    occurrences: List[dt.date]


class SimulationResponse(BaseModel):
    """Projected values, one row per simulated day."""

    start: dt.date
    accounts: List[AccountSummary]
    transactions: List[TransactionSchedule]
    days: List[DayRow]
