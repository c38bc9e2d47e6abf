"""Building simulations from sample data and JSON specification files."""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from budgetsim.core.simulation import Simulation, SimulationBuilder
from budgetsim.domain.accounts import AccountID, AccountSpec
from budgetsim.domain.transactions import DateInterval, Transaction, TransactionError
from budgetsim.schemas.simulation import SimulationDocument

logger = logging.getLogger(__name__)


class SpecificationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def load_sample_simulation() -> Simulation:
    """The built-in example: a bank account, savings, a salary and costs."""
    bank = AccountID(id_val=0)
    savings = AccountID(id_val=1)
    employer = AccountID(id_val=2)
    costs = AccountID(id_val=3)

    builder = SimulationBuilder(start=dt.date(2023, 2, 23))
    builder.add_account(bank, AccountSpec(name="Bank", initial_value="£1000.00"))
    builder.add_account(savings, AccountSpec(name="Savings", initial_value="£500.00", interest=0.03))
    # employer pays out of nothing: the negative charge cancels the withdrawal
    builder.add_account(employer, AccountSpec(name="Employer", initial_value="£0.00", out_charge=-1.0))
    # costs swallow everything paid into them
    builder.add_account(costs, AccountSpec(name="Costs", initial_value="£0.00", in_charge=1.0))

    builder.add_transaction(Transaction.single(builder, "£500.00", bank, savings, dt.date(2023, 2, 25)))
    builder.add_transaction(
        Transaction.repeating(builder, "£1500", employer, bank, dt.date(2023, 2, 24), DateInterval.MONTHLY)
    )
    return builder.build()


def simulation_from_document(document: SimulationDocument) -> Simulation:
    """Build a simulation, raising ``SpecificationError`` for the first bad transaction."""
    builder = SimulationBuilder(start=document.start)
    try:
        for account in document.accounts:
            builder.add_account(
                AccountID(id_val=account.id),
                AccountSpec(
                    name=account.name,
                    initial_value=account.initialValue,
                    interest=account.interest,
                    out_charge=account.outCharge,
                    in_charge=account.inCharge,
                ),
            )
    except ValidationError as exc:
        raise SpecificationError([str(error["msg"]) for error in exc.errors()]) from exc
    except ValueError as exc:
        raise SpecificationError([str(exc)]) from exc

    for index, row in enumerate(document.transactions):
        source = AccountID(id_val=row.source)
        sink = AccountID(id_val=row.sink)
        try:
            if row.interval is None:
                txn = Transaction.single(builder, row.value, source, sink, row.start)
            elif row.end is None:
                txn = Transaction.repeating(builder, row.value, source, sink, row.start, row.interval)
            else:
                txn = Transaction.repeating_until(
                    builder, row.value, source, sink, row.start, row.interval, row.end
                )
        except TransactionError as exc:
            raise SpecificationError([f"transactions[{index}]: {exc}"]) from exc
        except ValueError as exc:
            raise SpecificationError([f"transactions[{index}].value: {exc}"]) from exc
        builder.add_transaction(txn)

    simulation = builder.build()
    logger.info(
        "Built simulation from %s with %d accounts and %d transactions",
        simulation.start,
        len(simulation.accounts),
        len(simulation.transactions),
    )
    return simulation


def load_simulation(path: Union[str, Path]) -> Simulation:
    """Read a JSON specification file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise SpecificationError([f"cannot read {path}: {exc.strerror or exc}"]) from exc
    except json.JSONDecodeError as exc:
        raise SpecificationError([f"{path}: invalid JSON: {exc.msg}"]) from exc

    try:
        document = SimulationDocument.model_validate(raw)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        logger.warning("Rejected specification %s: %s", path, "; ".join(errors))
        raise SpecificationError(errors) from exc

    return simulation_from_document(document)
