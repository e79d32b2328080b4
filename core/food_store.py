# core/food_store.py
"""
Food catalog queries.

Every query reads a snapshot from the backend and filters/sorts it here.
"No match" is always a successful, empty answer; only malformed input
(``InvalidArgument``) and backend failures (``StorageUnavailable``) raise.
"""

import asyncio
import logging
import math
from numbers import Real
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.config import DATABASE_URL, STORE_BACKEND
from core.db import Base, make_engine, make_session_factory
from core.exceptions import Cancelled, FoodNotFound, InvalidArgument, StorageUnavailable
from core.storage import FoodBackend, InMemoryBackend, SqlAlchemyBackend
from models.food_item import Food

logger = logging.getLogger(__name__)


def _by_id(food: Food):
    return food.id


def _by_price_then_id(food: Food):
    return (food.price, food.id)


def _require_number(value, field: str) -> float:
    # bool is a Real subclass but never a meaningful price
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"{field} must be a number", {field: value})
    try:
        number = float(value)
    except OverflowError:
        # ints beyond float range still compare correctly as infinities
        number = math.inf if value > 0 else -math.inf
    if math.isnan(number):
        raise InvalidArgument(f"{field} must not be NaN", {field: value})
    return number


def _validate_record(name, price) -> float:
    if not isinstance(name, str):
        raise InvalidArgument("name must be a string", {"name": name})
    price = _require_number(price, "price")
    if math.isinf(price) or price < 0:
        raise InvalidArgument("price must be a finite non-negative number", {"price": price})
    return price


class FoodStore:
    """Read-only queries and record lifecycle over a storage backend."""

    def __init__(self, backend: FoodBackend):
        self.backend = backend

    # ---- queries ----

    def find_by_name(self, name: str) -> Optional[Food]:
        """Exact, case-sensitive name lookup. Duplicate names resolve to the smallest id."""
        matches = [food for food in self.backend.scan() if food.name == name]
        if not matches:
            return None
        return min(matches, key=_by_id)

    def find_by_price_greater_than(self, price: float) -> List[Food]:
        """Records priced strictly above ``price``, ascending by id."""
        threshold = _require_number(price, "price")
        return sorted((f for f in self.backend.scan() if f.price > threshold), key=_by_id)

    def find_by_name_containing_ignore_case(self, keyword: str) -> List[Food]:
        """Records whose name contains ``keyword`` under Unicode case folding, ascending by id."""
        if not isinstance(keyword, str):
            raise InvalidArgument("keyword must be a string", {"keyword": keyword})
        needle = keyword.casefold()
        return sorted((f for f in self.backend.scan() if needle in f.name.casefold()), key=_by_id)

    def find_food_in_price_range(self, low: float, high: float) -> List[Food]:
        """
        Records with ``low <= price <= high``, ordered by price then id.

        Raises InvalidArgument when ``low > high``.
        """
        low = _require_number(low, "low")
        high = _require_number(high, "high")
        if low > high:
            raise InvalidArgument(
                f"low ({low}) must not exceed high ({high})",
                {"low": low, "high": high}
            )
        in_range = [f for f in self.backend.scan() if low <= f.price <= high]
        return sorted(in_range, key=_by_price_then_id)

    # ---- lookups ----

    def get(self, food_id: int) -> Optional[Food]:
        return self.backend.get(food_id)

    def find_all(self) -> List[Food]:
        return sorted(self.backend.scan(), key=_by_id)

    def count(self) -> int:
        return len(self.backend.scan())

    # ---- lifecycle ----

    def add(self, name: str, price: float) -> Food:
        price = _validate_record(name, price)
        food = self.backend.insert(name, price)
        logger.info("Added food %s (%s, %.2f)", food.id, food.name, food.price)
        return food

    def replace(self, food: Food) -> Food:
        """Replace the stored record with the same id. Raises FoodNotFound for an unknown id."""
        price = _validate_record(food.name, food.price)
        food = Food(id=food.id, name=food.name, price=price)
        if not self.backend.replace(food):
            raise FoodNotFound(food.id)
        logger.info("Replaced food %s", food.id)
        return food

    def delete(self, food_id: int) -> bool:
        removed = self.backend.delete(food_id)
        if removed:
            logger.info("Deleted food %s", food_id)
        else:
            logger.debug("Delete ignored, no food %s", food_id)
        return removed


class AsyncFoodStore:
    """
    Awaitable facade over FoodStore.

    Each call runs in a worker thread so outstanding queries never block one
    another. Cancelling the awaiting task raises Cancelled instead of
    returning a result.
    """

    def __init__(self, store: FoodStore):
        self.store = store

    async def _run(self, operation: str, *args):
        try:
            return await asyncio.to_thread(getattr(self.store, operation), *args)
        except asyncio.CancelledError as exc:
            if isinstance(exc, Cancelled):
                raise
            logger.debug("Query %s cancelled", operation)
            raise Cancelled(operation) from exc

    async def find_by_name(self, name: str) -> Optional[Food]:
        return await self._run("find_by_name", name)

    async def find_by_price_greater_than(self, price: float) -> List[Food]:
        return await self._run("find_by_price_greater_than", price)

    async def find_by_name_containing_ignore_case(self, keyword: str) -> List[Food]:
        return await self._run("find_by_name_containing_ignore_case", keyword)

    async def find_food_in_price_range(self, low: float, high: float) -> List[Food]:
        return await self._run("find_food_in_price_range", low, high)

    async def get(self, food_id: int) -> Optional[Food]:
        return await self._run("get", food_id)


def create_store(backend: Optional[str] = None, database_url: str = DATABASE_URL) -> FoodStore:
    """Build a FoodStore for the configured backend (``sql`` or ``memory``)."""
    backend = (backend or STORE_BACKEND).lower()
    if backend == "memory":
        return FoodStore(InMemoryBackend())
    if backend == "sql":
        engine = make_engine(database_url)
        try:
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as exc:
            raise StorageUnavailable(SqlAlchemyBackend.name, str(exc)) from exc
        return FoodStore(SqlAlchemyBackend(make_session_factory(engine)))
    raise InvalidArgument(f"Unknown store backend: {backend}", {"backend": backend})
