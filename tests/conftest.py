import pytest

from core.db import Base, make_engine, make_session_factory
from core.food_store import FoodStore
from core.storage import InMemoryBackend, SqlAlchemyBackend


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://", echo=False)
    Base.metadata.create_all(bind=engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        return FoodStore(InMemoryBackend())
    return FoodStore(SqlAlchemyBackend(request.getfixturevalue("session_factory")))


@pytest.fixture
def fruit_store(store):
    """Apple (1, 2.5), Bread (2, 1.0), Banana (3, 2.5)."""
    store.add("Apple", 2.5)
    store.add("Bread", 1.0)
    store.add("Banana", 2.5)
    return store
