"""Generic filter-based data access over SQLAlchemy models."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select, update
from sqlalchemy.orm import Session

from momentum.db.session import Base
from momentum.db.time import utcnow

__all__ = ["RecordStore"]

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore(Generic[ModelT]):
    """Thin wrapper that reads and writes one model by field filters.

    A filter is a mapping of column name to the value that column must hold.
    The store flushes but never commits; callers own the transaction.
    """

    def __init__(self, session: Session, model: type[ModelT]) -> None:
        """Initialize the store with a SQLAlchemy session and a mapped model."""
        self.session = session
        self.model = model
        self._columns = frozenset(model.__table__.columns.keys())

    def _where(self, filter_: Mapping[str, Any]) -> list[ColumnElement[bool]]:
        unknown = set(filter_) - self._columns
        if unknown:
            raise ValueError(f"Unknown fields for {self.model.__name__}: {sorted(unknown)}")
        return [getattr(self.model, name) == value for name, value in filter_.items()]

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - self._columns
        if unknown:
            raise ValueError(f"Unknown fields for {self.model.__name__}: {sorted(unknown)}")

    def create(self, **fields: Any) -> ModelT:
        """Insert a new record and return it with its store-assigned id."""
        self._check_fields(fields)
        record = self.model(**fields)
        self.session.add(record)
        self.session.flush()
        return record

    def read_one(self, filter_: Mapping[str, Any]) -> ModelT | None:
        """Return the first record matching `filter_`, or None."""
        stmt = select(self.model).where(*self._where(filter_)).limit(1)
        return self.session.execute(stmt).scalars().first()

    def read_many(
        self,
        filter_: Mapping[str, Any],
        order_by: Sequence[ColumnElement[Any]] | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        """Return every record matching `filter_`.

        Args:
            filter_: Column name to required value.
            order_by: Explicit sort expressions; insertion order when omitted.
            limit: Optional maximum number of rows.
        """
        stmt = select(self.model).where(*self._where(filter_))
        if order_by:
            stmt = stmt.order_by(*order_by)
        else:
            stmt = stmt.order_by(*self.model.__table__.primary_key.columns)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars())

    def partial_update(self, filter_: Mapping[str, Any], fields: Mapping[str, Any]) -> int:
        """Update the given fields on every matching record.

        Keys missing from `fields` are left unchanged; an explicit None clears
        the column. Returns the number of rows affected.
        """
        self._check_fields(fields)
        values = dict(fields)
        if "updated_at" in self._columns:
            values.setdefault("updated_at", utcnow())
        stmt = (
            update(self.model)
            .where(*self._where(filter_))
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return result.rowcount

    def delete(self, filter_: Mapping[str, Any]) -> int:
        """Remove every matching record and return the number of rows deleted."""
        stmt = (
            delete(self.model)
            .where(*self._where(filter_))
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return result.rowcount
