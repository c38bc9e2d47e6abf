"""Day-by-day projection of account balances under recurring transfers."""

from budgetsim.core.simulation import Simulation, SimulationBuilder, SimulationIterator
from budgetsim.domain.accounts import AccountID, AccountSpec, AccountState
from budgetsim.domain.transactions import DateInterval, Transaction, TransactionError

__all__ = [
    "AccountID",
    "AccountSpec",
    "AccountState",
    "DateInterval",
    "Simulation",
    "SimulationBuilder",
    "SimulationIterator",
    "Transaction",
    "TransactionError",
]
