import os
import uuid
import pytest
from datetime import datetime, timedelta, UTC

# Force the database module onto its test engine before anything imports it
os.environ.setdefault("PYTEST_RUNNING", "1")

from fastapi.testclient import TestClient

import bluemoon.db.database as db_module
from bluemoon.api.main import app
from bluemoon.db import models
from bluemoon.utils.passwords import hash_password

_GLOBAL_SESSION = None


def _clean_tables(session):
    for table in reversed(models.Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()


# Per-test session; every table is emptied afterwards
@pytest.fixture(autouse=True)
def db_session():
    global _GLOBAL_SESSION
    models.Base.metadata.create_all(bind=db_module.engine)
    session = db_module.SessionLocal()
    _GLOBAL_SESSION = session
    try:
        yield session
    finally:
        _GLOBAL_SESSION = None
        session.rollback()
        _clean_tables(session)
        session.close()


def _override_get_db():
    # Endpoints share the test's session so fixtures and requests see the same rows
    if _GLOBAL_SESSION is not None:
        yield _GLOBAL_SESSION
        return
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


@pytest.fixture
def db(db_session):
    return db_session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def user_factory(db_session):
    def _create(role: str = "staff", email: str = None, name: str = None, password: str = None):
        email = email or f"{role}_{uuid.uuid4().hex[:8]}@bluemoon.test"
        user = models.User(
            name=name or role.title(),
            email=email,
            # Hashing is slow; only pay for it when a test logs in
            password_hash=hash_password(password) if password else "not-a-hash",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _create


@pytest.fixture
def admin(user_factory):
    return user_factory("admin", email="admin@bluemoon.test", name="Admin")


@pytest.fixture
def manager(user_factory):
    return user_factory("manager", email="manager@bluemoon.test", name="Manager")


@pytest.fixture
def accountant(user_factory):
    return user_factory("accountant", email="accountant@bluemoon.test", name="Accountant")


@pytest.fixture
def staff(user_factory):
    return user_factory("staff", email="staff@bluemoon.test", name="Staff")


@pytest.fixture
def fee_factory(db_session):
    def _create(name: str = "Management fee", type: str = "mandatory", amount: float = 500000, **kwargs):
        fee = models.Fee(name=name, type=type, amount=amount, **kwargs)
        db_session.add(fee)
        db_session.commit()
        db_session.refresh(fee)
        return fee
    return _create


@pytest.fixture
def household_factory(db_session):
    counter = {"n": 0}

    def _create(household_code: str = None, apartment_number: str = None, **kwargs):
        counter["n"] += 1
        household = models.Household(
            household_code=household_code or f"HK{counter['n']:03d}",
            apartment_number=apartment_number or f"A{counter['n']:02d}",
            **kwargs,
        )
        db_session.add(household)
        db_session.commit()
        db_session.refresh(household)
        return household
    return _create


@pytest.fixture
def resident_factory(db_session):
    def _create(household=None, full_name: str = "Nguyen Van An", **kwargs):
        resident = models.Resident(
            household_id=household.id if household is not None else None,
            full_name=full_name,
            **kwargs,
        )
        db_session.add(resident)
        db_session.commit()
        db_session.refresh(resident)
        return resident
    return _create


@pytest.fixture
def payment_factory(db_session):
    def _create(fee, household, amount: float = None, payment_date: datetime = None, **kwargs):
        payment = models.Payment(
            fee_id=fee.id,
            household_id=household.id,
            amount=fee.amount if amount is None else amount,
            payment_date=payment_date or datetime.now(UTC),
            **kwargs,
        )
        db_session.add(payment)
        db_session.commit()
        db_session.refresh(payment)
        return payment
    return _create


@pytest.fixture
def past_due():
    return datetime.now(UTC) - timedelta(days=1)
