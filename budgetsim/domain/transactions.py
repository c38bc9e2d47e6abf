from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from budgetsim.core.money import as_money
from budgetsim.domain.accounts import AccountID, AccountSpec


class DateInterval(str, Enum):
    """Calendar intervals a transaction can repeat on."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TransactionError(ValueError):
    """A transaction could not be built from the given values."""


class InvalidAccountIDError(TransactionError):
    def __init__(self, account_id: AccountID):
        super().__init__(f"account {account_id.id_val} does not exist")
        self.account_id = account_id


class DuplicateAccountIDError(TransactionError):
    def __init__(self, account_id: AccountID):
        super().__init__(f"account {account_id.id_val} is both source and sink")
        self.account_id = account_id


class InvalidStartEndDateCombinationError(TransactionError):
    def __init__(self, start: dt.date, end: dt.date):
        super().__init__(f"end date {end.isoformat()} is before start date {start.isoformat()}")
        self.start = start
        self.end = end


def _accounts_of(simulation: Any) -> Mapping[AccountID, AccountSpec]:
    accounts = getattr(simulation, "accounts", simulation)
    if not isinstance(accounts, Mapping):
        raise TypeError(f"cannot read accounts from {type(simulation).__name__}")
    return accounts


def check_transaction(
    accounts: Mapping[AccountID, AccountSpec],
    source: AccountID,
    sink: AccountID,
    start: dt.date,
    end: Optional[dt.date] = None,
) -> None:
    """Raise the first ``TransactionError`` that applies, if any."""
    if source not in accounts:
        raise InvalidAccountIDError(source)
    if sink not in accounts:
        raise InvalidAccountIDError(sink)
    if source == sink:
        raise DuplicateAccountIDError(source)
    if end is not None and end < start:
        raise InvalidStartEndDateCombinationError(start, end)


class Transaction(BaseModel):
    """A transfer of ``value`` from ``source`` to ``sink``.

    Happens first on ``start`` and then on every date matching ``interval``
    (if any) until the day before ``end`` (if any). Build instances with
    ``single``, ``repeating`` or ``repeating_until`` so the accounts get
    checked against a simulation.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: Decimal
    source: AccountID
    sink: AccountID
    start: dt.date
    interval: Optional[DateInterval] = None
    end: Optional[dt.date] = None

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: object) -> Decimal:
        return as_money(value)  # type: ignore[arg-type]

    @classmethod
    def single(
        cls,
        simulation: Any,
        value: Any,
        source: AccountID,
        sink: AccountID,
        date: dt.date,
    ) -> "Transaction":
        """A transaction happening on one date only."""
        check_transaction(_accounts_of(simulation), source, sink, date)
        return cls(value=value, source=source, sink=sink, start=date)

    @classmethod
    def repeating(
        cls,
        simulation: Any,
        value: Any,
        source: AccountID,
        sink: AccountID,
        start: dt.date,
        interval: DateInterval,
    ) -> "Transaction":
        """A transaction repeating forever from ``start``."""
        txn = cls.single(simulation, value, source, sink, start)
        return txn.model_copy(update={"interval": DateInterval(interval)})

    @classmethod
    def repeating_until(
        cls,
        simulation: Any,
        value: Any,
        source: AccountID,
        sink: AccountID,
        start: dt.date,
        interval: DateInterval,
        end: dt.date,
    ) -> "Transaction":
        """A transaction repeating from ``start`` up to, not including, ``end``."""
        txn = cls.repeating(simulation, value, source, sink, start, interval)
        if end < start:
            raise InvalidStartEndDateCombinationError(start, end)
        return txn.model_copy(update={"end": end})

    def occurs(self, date: dt.date) -> bool:
        """Whether this transaction takes place on ``date``."""
        if date < self.start:
            return False
        if self.end is not None and date >= self.end:
            return False

        # Months without the start day (e.g. the 31st) are skipped, and
        # yearly matching is by day of year, so it drifts a day around Feb 29.
        if self.interval is None:
            return date == self.start
        if self.interval is DateInterval.DAILY:
            return True
        if self.interval is DateInterval.WEEKLY:
            return date.weekday() == self.start.weekday()
        if self.interval is DateInterval.MONTHLY:
            return date.day == self.start.day
        if self.interval is DateInterval.YEARLY:
            return date.timetuple().tm_yday == self.start.timetuple().tm_yday
        return False

    def occurrences(self, first: dt.date, last: dt.date) -> List[dt.date]:
        """Dates between ``first`` and ``last`` (inclusive) this transaction happens on."""
        days: List[dt.date] = []
        current = max(first, self.start)
        while current <= last:
            if self.end is not None and current >= self.end:
                break
            if self.occurs(current):
                days.append(current)
                if self.interval is None:
                    break
            if current == last:
                break
            current += dt.timedelta(days=1)
        return days
