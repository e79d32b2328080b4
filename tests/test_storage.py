import pytest
from sqlalchemy import select

from core.db import make_engine, make_session_factory
from core.exceptions import InvalidArgument, StorageUnavailable
from core.food_store import FoodStore, create_store
from core.storage import InMemoryBackend, SqlAlchemyBackend
from models.audit_log import AuditLog
from models.food_item import Food


def test_memory_scan_is_a_snapshot():
    backend = InMemoryBackend()
    backend.insert("Apple", 2.5)
    snapshot = backend.scan()
    backend.insert("Bread", 1.0)
    assert [f.name for f in snapshot] == ["Apple"]
    assert len(backend.scan()) == 2


def test_memory_ids_are_not_reused_after_delete():
    backend = InMemoryBackend()
    first = backend.insert("Apple", 2.5)
    backend.delete(first.id)
    assert backend.insert("Bread", 1.0).id != first.id


def test_sql_get_and_scan_return_plain_records(session_factory):
    backend = SqlAlchemyBackend(session_factory)
    food = backend.insert("Apple", 2.5)
    assert backend.get(food.id) == Food(id=food.id, name="Apple", price=2.5)
    assert backend.get(12345) is None
    assert all(isinstance(f, Food) for f in backend.scan())


def test_sql_mutations_write_audit_rows(session_factory):
    store = FoodStore(SqlAlchemyBackend(session_factory))
    food = store.add("Apple", 2.5)
    store.replace(Food(id=food.id, name="Apple", price=3.0))
    store.delete(food.id)

    with session_factory() as db:
        rows = db.execute(select(AuditLog).order_by(AuditLog.id)).scalars().all()
    assert [(r.action, r.food_id) for r in rows] == [
        ("create", food.id),
        ("replace", food.id),
        ("delete", food.id),
    ]


def test_sql_missing_record_writes_no_audit_row(session_factory):
    backend = SqlAlchemyBackend(session_factory)
    assert backend.delete(7) is False
    assert backend.replace(Food(id=7, name="Ghost", price=1.0)) is False
    with session_factory() as db:
        assert db.execute(select(AuditLog)).first() is None


@pytest.fixture
def broken_store(tmp_path):
    # The parent directory does not exist, so SQLite cannot open the file
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'foods.db'}", echo=False)
    return FoodStore(SqlAlchemyBackend(make_session_factory(engine)))


@pytest.mark.parametrize("call", [
    lambda s: s.find_by_name("Apple"),
    lambda s: s.find_by_price_greater_than(1.0),
    lambda s: s.find_by_name_containing_ignore_case("a"),
    lambda s: s.find_food_in_price_range(0.0, 1.0),
    lambda s: s.get(1),
    lambda s: s.add("Apple", 2.5),
])
def test_storage_failures_surface_as_storage_unavailable(broken_store, call):
    with pytest.raises(StorageUnavailable) as exc_info:
        call(broken_store)
    assert exc_info.value.code == "STORAGE_UNAVAILABLE"
    assert exc_info.value.details["backend"] == "sql"
    assert exc_info.value.__cause__ is not None


def test_invalid_range_is_reported_before_touching_storage(broken_store):
    with pytest.raises(InvalidArgument):
        broken_store.find_food_in_price_range(2.0, 1.0)


def test_create_store_memory():
    store = create_store("memory")
    assert isinstance(store.backend, InMemoryBackend)
    assert store.find_all() == []


def test_create_store_sql_creates_tables(tmp_path):
    store = create_store("sql", database_url=f"sqlite:///{tmp_path / 'foods.db'}")
    food = store.add("Apple", 2.5)
    assert store.find_by_name("Apple") == food


def test_create_store_sql_unreachable(tmp_path):
    with pytest.raises(StorageUnavailable):
        create_store("sql", database_url=f"sqlite:///{tmp_path / 'missing' / 'foods.db'}")


def test_create_store_unknown_backend():
    with pytest.raises(InvalidArgument):
        create_store("redis")
