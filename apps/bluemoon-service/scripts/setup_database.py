"""Seed a fresh database with role accounts, default fees and optional sample data."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from contextlib import suppress
from datetime import date, datetime, timedelta, UTC

from dotenv import load_dotenv

load_dotenv()

from bluemoon.db import models, database, schemas  # noqa: E402
from bluemoon.db.repositories import fees as fees_repo  # noqa: E402
from bluemoon.db.repositories import users as users_repo  # noqa: E402
from bluemoon.utils.role_permissions import ROLE_ACCOUNTANT, ROLE_ADMIN, ROLE_MANAGER, ROLE_STAFF  # noqa: E402


logger = logging.getLogger("bluemoon.scripts.setup_database")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


DEFAULT_USERS = [
    {"name": "Admin", "email": "admin@bluemoon.com", "password": "admin123", "role": ROLE_ADMIN},
    {"name": "Manager", "email": "manager@bluemoon.com", "password": "manager123", "role": ROLE_MANAGER},
    {"name": "Accountant", "email": "accountant@bluemoon.com", "password": "accountant123", "role": ROLE_ACCOUNTANT},
    {"name": "Staff", "email": "staff@bluemoon.com", "password": "staff123", "role": ROLE_STAFF},
]

DEFAULT_FEES = [
    {
        "fee_code": "PHI001",
        "name": "Monthly management fee",
        "amount": 500000,
        "type": "mandatory",
        "mandatory": True,
        "description": "Monthly building management fee per apartment",
    },
    {
        "fee_code": "PHI002",
        "name": "Car parking fee",
        "amount": 1200000,
        "type": "parking",
        "description": "Monthly parking fee per car",
    },
    {
        "fee_code": "PHI003",
        "name": "Motorbike parking fee",
        "amount": 100000,
        "type": "parking",
        "description": "Monthly parking fee per motorbike",
    },
    {
        "fee_code": "PHI004",
        "name": "Common area repair contribution",
        "amount": 200000,
        "type": "contribution",
        "description": "Contribution towards repairs of shared facilities",
    },
]

FIRST_NAMES = ["Nguyen Van", "Tran Thi", "Le Van", "Pham Thi", "Hoang Van", "Vu Thi"]
LAST_NAMES = ["An", "Binh", "Cuong", "Dung", "Hai", "Khoa", "Long", "Nam", "Quang", "Tuan"]
RELATIONSHIPS = ["Head", "Spouse", "Child", "Child", "Parent"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the BlueMoon database")
    parser.add_argument(
        "--sample-households",
        type=int,
        default=0,
        help="Number of sample households (with residents and payments) to create (default: 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible sample data",
    )
    return parser.parse_args(argv)


def ensure_users(session) -> int:
    created = 0
    for entry in DEFAULT_USERS:
        if users_repo.get_user_by_email(session, entry["email"]):
            logger.info("User %s already exists", entry["email"])
            continue
        users_repo.create_user(
            session,
            schemas.UserCreate(name=entry["name"], email=entry["email"], password=entry["password"]),
            role=entry["role"],
        )
        created += 1
        logger.info("Created %s user %s", entry["role"], entry["email"])
    return created


def ensure_fees(session) -> list[models.Fee]:
    now = datetime.now(UTC)
    fees = []
    for entry in DEFAULT_FEES:
        existing = session.query(models.Fee).filter(models.Fee.fee_code == entry["fee_code"]).first()
        if existing:
            fees.append(existing)
            continue
        fee = fees_repo.create_fee(
            session,
            schemas.FeeCreate(start_date=now, due_date=now + timedelta(days=30), **entry),
        )
        logger.info("Created fee %s (%s)", fee.fee_code, fee.name)
        fees.append(fee)
    return fees


def create_sample_data(session, count: int, fees: list[models.Fee], rng: random.Random) -> int:
    collector = users_repo.get_first_admin(session)
    today = datetime.now(UTC)
    existing = session.query(models.Household).count()
    for index in range(count):
        number = existing + index + 1
        apartment = f"{chr(65 + (number - 1) // 5 % 26)}{(number - 1) % 5 + 1:02d}"
        household = models.Household(
            household_code=f"HK{number:04d}",
            apartment_number=apartment,
            address=f"Apartment {apartment}, BlueMoon building",
        )
        session.add(household)
        session.flush()

        residents = []
        for position in range(rng.randint(2, 5)):
            resident = models.Resident(
                household_id=household.id,
                full_name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                date_of_birth=date(today.year - rng.randint(18, 80), rng.randint(1, 12), rng.randint(1, 28)),
                gender=rng.choice(["male", "female"]),
                id_card=f"{rng.randint(100000000, 999999999)}",
                phone=f"09{rng.randint(10000000, 99999999)}",
                relationship_to_head=RELATIONSHIPS[position] if position < len(RELATIONSHIPS) else "Other",
                move_in_date=date(rng.randint(2018, today.year - 1), rng.randint(1, 12), rng.randint(1, 28)),
            )
            session.add(resident)
            residents.append(resident)
        session.flush()
        household.household_head_id = residents[0].id

        for fee in rng.sample(fees, k=rng.randint(1, len(fees))):
            session.add(models.Payment(
                fee_id=fee.id,
                household_id=household.id,
                amount=fee.amount,
                payment_date=today - timedelta(days=rng.randint(0, today.day - 1)),
                payer_name=residents[0].full_name,
                collector_id=collector.id if collector else None,
                note=f"{fee.name} {today:%m/%Y}",
            ))
    session.commit()
    return count


def setup(sample_households: int, seed: int | None) -> int:
    session = SessionLocal()
    try:
        users_created = ensure_users(session)
        fees = ensure_fees(session)
        print(f"Users created: {users_created}; fees available: {len(fees)}")
        if sample_households > 0:
            created = create_sample_data(session, sample_households, fees, random.Random(seed))
            print(f"Sample households created: {created}")
        return 0
    except Exception:
        session.rollback()
        logger.exception("Database setup failed")
        return 1
    finally:
        with suppress(Exception):
            session.close()


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return setup(sample_households=args.sample_households, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
