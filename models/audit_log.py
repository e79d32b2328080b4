from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone
from core.db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String, nullable=False)  # create, replace, delete
    food_id = Column(Integer, nullable=False, index=True)
    detail = Column(String)
    timestamp = Column(DateTime, default=_utcnow)

    def __repr__(self):
        return f"<AuditLog {self.action} food={self.food_id}>"
