from dataclasses import dataclass
from sqlalchemy import Column, Integer, String, Float
from core.db import Base


@dataclass(frozen=True)
class Food:
    """Immutable catalog record handed out by the store."""
    id: int
    name: str
    price: float


class FoodItem(Base):
    __tablename__ = "foods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    price = Column(Float, nullable=False)

    def to_food(self) -> Food:
        return Food(id=self.id, name=self.name, price=self.price)

    def __repr__(self):
        return f"<FoodItem {self.id}: {self.name} ({self.price})>"
