from __future__ import annotations

import datetime as dt

import pytest
from flask.testing import FlaskClient

from budgetsim.app import create_app
from budgetsim.config import Settings
from budgetsim.core.simulation import Simulation
from budgetsim.domain.accounts import AccountID, AccountSpec


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings(cors_origins=["http://localhost:5173"], default_days=5, max_days=100))
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def accounts() -> dict:
    return {
        AccountID(id_val=0): AccountSpec(name="Current", initial_value="£1000.00"),
        AccountID(id_val=1): AccountSpec(name="Savings", initial_value="£500.00", interest=0.03),
    }


@pytest.fixture()
def two_accounts(accounts) -> Simulation:
    return Simulation(accounts, start=dt.date(2023, 2, 23))
