import io
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import init_db
from models.catalog import CatalogEntry
from models.users import User
from schemas.user import UserSession
from utils.gateway import Gateway
from utils.hashing import get_password_hash
from utils.permissions import Role
from utils.prompt import Prompter

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def gateway(db):
    return Gateway(db)


@pytest.fixture
def seeded(db):
    db.add_all([
        User(login="alice", password_hash=get_password_hash("pw"), role="customer", fav_games="", phone_num="555"),
        User(login="bob", password_hash=get_password_hash("pw"), role="employee", fav_games=""),
        User(login="carol", password_hash=get_password_hash("pw"), role="manager", fav_games=""),
        CatalogEntry(game_id="G1", game_name="Star Raiders", genre="Shooter", price=Decimal("9.99")),
        CatalogEntry(game_id="G2", game_name="Turbo Kart", genre="Racing", price=Decimal("5.00")),
        CatalogEntry(game_id="game3", game_name="Kingdom Quest", genre="RPG", price=Decimal("14.50")),
    ])
    db.commit()
    return db


@pytest.fixture
def customer():
    return UserSession(login="alice", role=Role.CUSTOMER)


@pytest.fixture
def employee():
    return UserSession(login="bob", role=Role.EMPLOYEE)


@pytest.fixture
def manager():
    return UserSession(login="carol", role=Role.MANAGER)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


def scripted(*lines):
    """Prompter answering with the given lines, output captured in .stdout."""
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    return Prompter(stdin=stdin, stdout=io.StringIO())


def output(prompter) -> str:
    return prompter.stdout.getvalue()
