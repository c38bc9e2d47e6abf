"""Day-by-day projection of account values.

A ``Simulation`` is the fixed description of a run: accounts, transactions
and a start date. Iterating it produces one ``(snapshot, date)`` pair per
simulated day, forever; callers take as many days as they need.

Order of operations (per day):
  1) Apply every transaction occurring on the current date, in the order the
     transactions were given. Each one reads the values left by the previous.
  2) Apply every account's daily update, touched by a transaction or not.
  3) Advance the date by one day and emit a copy of the values.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from itertools import islice
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from budgetsim.domain.accounts import AccountID, AccountSpec, AccountState
from budgetsim.domain.transactions import Transaction, check_transaction

logger = logging.getLogger(__name__)

Snapshot = Dict[AccountID, Decimal]
Step = Tuple[Snapshot, dt.date]


class SimulationStateError(RuntimeError):
    """A transaction refers to an account the simulation does not have."""


@dataclass(frozen=True, eq=False)
class Simulation:
    accounts: Mapping[AccountID, AccountSpec]
    transactions: Tuple[Transaction, ...]
    start: dt.date

    def __init__(
        self,
        accounts: Mapping[AccountID, AccountSpec],
        transactions: Iterable[Transaction] = (),
        *,
        start: dt.date,
    ):
        frozen_accounts = MappingProxyType(dict(accounts))
        frozen_transactions = tuple(transactions)
        for txn in frozen_transactions:
            check_transaction(frozen_accounts, txn.source, txn.sink, txn.start, txn.end)
        object.__setattr__(self, "accounts", frozen_accounts)
        object.__setattr__(self, "transactions", frozen_transactions)
        object.__setattr__(self, "start", start)

    def with_transactions(self, *transactions: Transaction) -> "Simulation":
        """Copy of this simulation with ``transactions`` appended."""
        return Simulation(self.accounts, self.transactions + tuple(transactions), start=self.start)

    def initial_values(self) -> Snapshot:
        return {account_id: spec.initial_value for account_id, spec in self.accounts.items()}

    def iter(self) -> "SimulationIterator":
        return SimulationIterator(self)

    def __iter__(self) -> Iterator[Step]:
        return self.iter()

    def run(self, days: int) -> List[Step]:
        """The first ``days`` simulated days."""
        if days < 0:
            raise ValueError("days must be >= 0")
        return list(islice(self.iter(), days))

    def history(self, account_id: AccountID, days: int) -> List[AccountState]:
        if account_id not in self.accounts:
            raise KeyError(account_id)
        return [AccountState(value=values[account_id], date=day) for values, day in self.run(days)]


@dataclass
class SimulationBuilder:
    """Collects accounts and then transactions before building a ``Simulation``.

    Transactions are checked against the accounts added so far, so add
    accounts first.
    """

    start: dt.date
    accounts: Dict[AccountID, AccountSpec] = field(default_factory=dict)
    transactions: List[Transaction] = field(default_factory=list)

    def add_account(self, account_id: AccountID, spec: AccountSpec) -> "SimulationBuilder":
        if account_id in self.accounts:
            raise ValueError(f"account {account_id.id_val} already defined")
        self.accounts[account_id] = spec
        return self

    def add_transaction(self, transaction: Transaction) -> "SimulationBuilder":
        check_transaction(self.accounts, transaction.source, transaction.sink, transaction.start, transaction.end)
        self.transactions.append(transaction)
        return self

    def build(self) -> Simulation:
        return Simulation(self.accounts, self.transactions, start=self.start)


class SimulationIterator:
    """Steps a simulation forward one day per ``next()``.

    The simulation itself is shared and never modified; the values and the
    current date belong to this iterator alone.
    """

    def __init__(self, simulation: Simulation):
        self._sim = simulation
        self._values: Snapshot = simulation.initial_values()
        self._date = simulation.start

    @property
    def values(self) -> Mapping[AccountID, Decimal]:
        return MappingProxyType(self._values)

    @property
    def date(self) -> dt.date:
        return self._date

    def __iter__(self) -> "SimulationIterator":
        return self

    def __next__(self) -> Step:
        for txn in self._sim.transactions:
            if not txn.occurs(self._date):
                continue
            logger.debug("%s: %s from account %s to account %s", self._date, txn.value, txn.source, txn.sink)
            source_spec = self._spec(txn.source)
            self._values[txn.source] = source_spec.source(self._values[txn.source], txn.value)
            sink_spec = self._spec(txn.sink)
            self._values[txn.sink] = sink_spec.sink(self._values[txn.sink], txn.value)

        for account_id, value in self._values.items():
            self._values[account_id] = self._spec(account_id).update(value)

        self._date = self._date + dt.timedelta(days=1)
        return dict(self._values), self._date

    def _spec(self, account_id: AccountID) -> AccountSpec:
        try:
            return self._sim.accounts[account_id]
        except KeyError:
            raise SimulationStateError(f"account {account_id.id_val} is not part of the simulation") from None
