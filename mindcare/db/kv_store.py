"""
Key-value record store over SQLAlchemy. Keys are logical strings
(user:<id>, chat:<subject>:<ts>:<id>, appointment:<id>, analytics:risk:<date>, ...);
values are JSON objects. Every write commits; store failures become DependencyUnavailableError.

Counter fields live in their own table and are added to with one upsert statement,
then folded back into value["counts"] on every read.
"""
import copy
import logging
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import func, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mindcare.core.errors import DependencyUnavailableError
from mindcare.db.models import Counter, KeyValue

logger = logging.getLogger(__name__)

# Backends with INSERT ... ON CONFLICT
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class KVStore:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, op: str, key: str) -> DependencyUnavailableError:
        self.db.rollback()
        logger.exception("Store %s failed for key=%s", op, key)
        return DependencyUnavailableError()

    def _insert(self, model):
        dialect = self.db.get_bind().dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise RuntimeError(f"Counters need a backend with INSERT ... ON CONFLICT, got {dialect}")
        return _UPSERT_INSERTS[dialect](model)

    def _counters(self, keys: Iterable[str] = (), prefix: Optional[str] = None) -> dict[str, dict[str, int]]:
        query = self.db.query(Counter.key, Counter.field, Counter.count)
        if prefix is not None:
            query = query.filter(Counter.key.startswith(prefix, autoescape=True))
        else:
            query = query.filter(Counter.key.in_(list(keys)))
        out: dict[str, dict[str, int]] = {}
        for key, field, count in query.all():
            out.setdefault(key, {})[field] = count
        return out

    @staticmethod
    def _with_counts(value: dict, counts: Optional[dict[str, int]]) -> dict:
        value = copy.deepcopy(value)
        if counts:
            value["counts"] = {**(value.get("counts") or {}), **counts}
        return value

    def get(self, key: str) -> Optional[dict]:
        try:
            row = self.db.get(KeyValue, key)
            counts = self._counters([key]) if row else {}
        except SQLAlchemyError:
            raise self._fail("get", key)
        return self._with_counts(row.value, counts.get(key)) if row else None

    def set(self, key: str, value: dict) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, dict]) -> None:
        """Write every key in one transaction: either all of them are stored or none are."""
        try:
            for key, value in items.items():
                row = self.db.get(KeyValue, key)
                if row:
                    row.value = copy.deepcopy(value)
                else:
                    self.db.add(KeyValue(key=key, value=copy.deepcopy(value)))
            self.db.commit()
        except SQLAlchemyError:
            raise self._fail("set", ",".join(items))

    def get_by_prefix(self, prefix: str) -> list[dict]:
        """Values whose key starts with prefix, in key order."""
        try:
            rows = (
                self.db.query(KeyValue)
                .filter(KeyValue.key.startswith(prefix, autoescape=True))
                .order_by(KeyValue.key)
                .all()
            )
            counts = self._counters(prefix=prefix) if rows else {}
        except SQLAlchemyError:
            raise self._fail("get_by_prefix", prefix)
        return [self._with_counts(r.value, counts.get(r.key)) for r in rows]

    def count_by_prefix(self, prefix: str) -> int:
        try:
            return (
                self.db.query(func.count(KeyValue.key))
                .filter(KeyValue.key.startswith(prefix, autoescape=True))
                .scalar()
            ) or 0
        except SQLAlchemyError:
            raise self._fail("count_by_prefix", prefix)

    def increment(self, key: str, field: str, amount: int = 1, initial: Optional[dict[str, Any]] = None) -> dict:
        """
        Add amount to value["counts"][field]. The add is a single INSERT ... ON CONFLICT DO UPDATE,
        so concurrent writers to the same key never lose an increment.
        A missing record starts from a copy of initial. Returns the stored value.
        """
        seed = (
            self._insert(KeyValue)
            .values(key=key, value=copy.deepcopy(initial or {}))
            .on_conflict_do_nothing(index_elements=["key"])
        )
        bump = self._insert(Counter).values(key=key, field=field, count=amount)
        bump = bump.on_conflict_do_update(
            index_elements=["key", "field"],
            set_={"count": Counter.count + bump.excluded.count},
        )
        try:
            if self.db.get_bind().dialect.name == "sqlite":
                # Take the write lock before the first statement; two deferred writers can deadlock
                self.db.execute(text("BEGIN IMMEDIATE"))
            self.db.execute(seed)
            self.db.execute(bump)
            self.db.commit()
        except SQLAlchemyError:
            raise self._fail("increment", key)
        return self.get(key)
