import threading
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database import init_db
from models.counter import IdCounter
from models.order import RentalOrder
from models.tracking import TrackingRecord
from models.users import User
from services.ids import IdentifierAllocator, numeric_suffix
from utils.errors import AllocationError
from utils.gateway import Gateway

NOW = datetime(2024, 1, 1)


def _order(order_id, login="alice"):
    return RentalOrder(rental_order_id=order_id, login=login, no_of_games=0,
                       total_price=Decimal("0"), order_timestamp=NOW, due_date=NOW)


def test_empty_tables_start_at_one(gateway):
    allocator = IdentifierAllocator(gateway)

    assert allocator.next_order_id() == "gamerentalorder1"
    assert allocator.next_tracking_id() == "trackingid1"


def test_ids_strictly_increase_within_a_session(gateway):
    allocator = IdentifierAllocator(gateway)

    issued = [numeric_suffix(allocator.next_order_id()) for _ in range(5)]

    assert issued == sorted(issued)
    assert len(set(issued)) == 5


def test_seed_uses_numeric_not_lexicographic_max(db, gateway):
    db.add(User(login="alice", password_hash="x", role="customer"))
    db.add_all([_order("gamerentalorder9"), _order("gamerentalorder10"), _order("gamerentalorder2")])
    db.add(TrackingRecord(tracking_id="trackingid41", rental_order_id="gamerentalorder9",
                          status="Delivered", last_update_date=NOW))
    db.commit()

    allocator = IdentifierAllocator(gateway)

    assert allocator.next_order_id() == "gamerentalorder11"
    assert allocator.next_tracking_id() == "trackingid42"


def test_counter_behind_stored_rows_is_resynced(db, gateway):
    db.add(User(login="alice", password_hash="x", role="customer"))
    db.add(IdCounter(name="rentalorder", value=1))
    db.add_all([_order("gamerentalorder2"), _order("gamerentalorder5")])
    db.commit()

    assert IdentifierAllocator(gateway).next_order_id() == "gamerentalorder6"
    assert db.query(IdCounter).filter_by(name="rentalorder").one().value == 6


def test_stored_id_without_number_cannot_be_allocated_past(db, gateway):
    db.add(User(login="alice", password_hash="x", role="customer"))
    db.add(_order("legacy-order"))
    db.commit()

    with pytest.raises(AllocationError):
        IdentifierAllocator(gateway).next_order_id()


def test_allocation_rolled_back_with_its_transaction(gateway):
    allocator = IdentifierAllocator(gateway)
    allocator.next_order_id()

    with pytest.raises(RuntimeError):
        with gateway.atomic():
            assert allocator.next_order_id() == "gamerentalorder2"
            raise RuntimeError("abandon")

    assert allocator.next_order_id() == "gamerentalorder2"


def test_concurrent_sessions_never_share_an_id(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    init_db(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    first = Session()
    IdentifierAllocator(Gateway(first)).next_order_id()
    first.close()

    issued, errors = [], []
    lock = threading.Lock()

    def worker():
        session = Session()
        gateway = Gateway(session)
        allocator = IdentifierAllocator(gateway)
        try:
            for _ in range(5):
                with gateway.atomic():
                    order_id = allocator.next_order_id()
                with lock:
                    issued.append(order_id)
        except Exception as e:
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    engine.dispose()

    assert errors == []
    assert len(issued) == 20
    assert sorted(numeric_suffix(i) for i in issued) == list(range(2, 22))
