"""Generic SQLAlchemy repository shared by the entity-specific stores."""
from __future__ import annotations

from typing import Any, Generic, Iterable, TypeVar

from sqlalchemy import ColumnElement, delete, func, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """
    Per-entity store with atomic, committed operations.

    Keys are the primary key value, or a tuple in primary-key column order for
    composite keys. Updates are explicit value updates: callers pass the changed
    fields rather than mutating a tracked instance.
    """

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        self.session = session

    def _key_criteria(self, key: Any) -> list[ColumnElement[bool]]:
        columns = inspect(self.model).primary_key
        values = key if isinstance(key, tuple) else (key,)
        if len(values) != len(columns):
            raise ValueError(f"{self.model.__name__} key expects {len(columns)} values")
        return [column == value for column, value in zip(columns, values)]

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def get_by_id(self, key: Any) -> ModelT | None:
        return self.session.get(self.model, key)

    def get_all_matching(self, *criteria: ColumnElement[bool], order_by: Iterable[Any] = ()) -> list[ModelT]:
        stmt = select(self.model).where(*criteria)
        ordering = list(order_by)
        if ordering:
            stmt = stmt.order_by(*ordering)
        return list(self.session.scalars(stmt))

    def first_matching(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        return self.session.scalars(select(self.model).where(*criteria).limit(1)).first()

    def count_matching(self, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return int(self.session.scalar(stmt) or 0)

    def create(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    def create_many(self, entities: Iterable[ModelT]) -> list[ModelT]:
        items = list(entities)
        if not items:
            return []
        self.session.add_all(items)
        self._commit()
        return items

    def update(self, key: Any, **values: Any) -> ModelT | None:
        """Write ``values`` onto the row identified by ``key`` and return the stored row."""

        stmt = update(self.model).where(*self._key_criteria(key)).values(**values)
        result = self.session.execute(stmt)
        self._commit()
        if result.rowcount == 0:
            return None
        return self.session.get(self.model, key, populate_existing=True)

    def delete(self, key: Any) -> bool:
        result = self.session.execute(delete(self.model).where(*self._key_criteria(key)))
        self._commit()
        return result.rowcount > 0

    def delete_matching(self, *criteria: ColumnElement[bool]) -> int:
        result = self.session.execute(delete(self.model).where(*criteria))
        self._commit()
        return int(result.rowcount or 0)


__all__ = ["Repository"]
