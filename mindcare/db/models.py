from sqlalchemy import Column, String, DateTime, Integer, JSON
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Credentials only; the profile (name, role) lives in the key-value store under user:<id>."""
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class KeyValue(Base):
    """Generic record store addressed by logical keys such as chat:<subject>:<ts> or analytics:risk:<date>."""
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class Counter(Base):
    """One integer per (record key, field). Incremented in place by a single upsert statement."""
    __tablename__ = "kv_counters"

    key = Column(String, primary_key=True)
    field = Column(String, primary_key=True)
    count = Column(Integer, nullable=False, default=0)
