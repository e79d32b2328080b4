# core/storage.py
"""
Storage backends for the food store.

A backend owns the authoritative record set. The store only needs ``get``
and ``scan`` to answer queries; ``insert``, ``replace`` and ``delete`` carry
the record lifecycle. Backends never filter or sort.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import StorageUnavailable
from core.logger import log_action
from models.food_item import Food, FoodItem

logger = logging.getLogger(__name__)


class FoodBackend(ABC):
    """Contract for food record storage."""

    name = "backend"

    @abstractmethod
    def get(self, food_id: int) -> Optional[Food]:
        """Return the record with this id, or None."""

    @abstractmethod
    def scan(self) -> List[Food]:
        """Return every current record, in no particular order."""

    @abstractmethod
    def insert(self, name: str, price: float) -> Food:
        """Store a new record under a freshly assigned id."""

    @abstractmethod
    def replace(self, food: Food) -> bool:
        """Overwrite the record with ``food.id``; False if it does not exist."""

    @abstractmethod
    def delete(self, food_id: int) -> bool:
        """Remove a record; False if it did not exist."""


class InMemoryBackend(FoodBackend):
    name = "memory"

    def __init__(self):
        self._records: Dict[int, Food] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, food_id: int) -> Optional[Food]:
        with self._lock:
            return self._records.get(food_id)

    def scan(self) -> List[Food]:
        # Snapshot, so readers never observe a write in progress
        with self._lock:
            return list(self._records.values())

    def insert(self, name: str, price: float) -> Food:
        with self._lock:
            food = Food(id=self._next_id, name=name, price=price)
            self._records[food.id] = food
            self._next_id += 1
        return food

    def replace(self, food: Food) -> bool:
        with self._lock:
            if food.id not in self._records:
                return False
            self._records[food.id] = food
            return True

    def delete(self, food_id: int) -> bool:
        with self._lock:
            return self._records.pop(food_id, None) is not None


class SqlAlchemyBackend(FoodBackend):
    """Backend over the ``foods`` table; one session per call."""

    name = "sql"

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def _unavailable(self, exc: SQLAlchemyError) -> StorageUnavailable:
        logger.error("Database error in %s backend: %s", self.name, exc)
        return StorageUnavailable(self.name, str(exc))

    def get(self, food_id: int) -> Optional[Food]:
        try:
            with self._session_factory() as db:
                row = db.get(FoodItem, food_id)
                return row.to_food() if row else None
        except SQLAlchemyError as exc:
            raise self._unavailable(exc) from exc

    def scan(self) -> List[Food]:
        try:
            with self._session_factory() as db:
                rows = db.execute(select(FoodItem)).scalars().all()
                return [row.to_food() for row in rows]
        except SQLAlchemyError as exc:
            raise self._unavailable(exc) from exc

    def insert(self, name: str, price: float) -> Food:
        try:
            with self._session_factory() as db:
                row = FoodItem(name=name, price=price)
                db.add(row)
                db.flush()
                log_action(db, "create", row.id, detail=name)
                db.commit()
                return row.to_food()
        except SQLAlchemyError as exc:
            raise self._unavailable(exc) from exc

    def replace(self, food: Food) -> bool:
        try:
            with self._session_factory() as db:
                row = db.get(FoodItem, food.id)
                if row is None:
                    return False
                row.name = food.name
                row.price = food.price
                log_action(db, "replace", food.id, detail=food.name)
                db.commit()
                return True
        except SQLAlchemyError as exc:
            raise self._unavailable(exc) from exc

    def delete(self, food_id: int) -> bool:
        try:
            with self._session_factory() as db:
                row = db.get(FoodItem, food_id)
                if row is None:
                    return False
                db.delete(row)
                log_action(db, "delete", food_id)
                db.commit()
                return True
        except SQLAlchemyError as exc:
            raise self._unavailable(exc) from exc
