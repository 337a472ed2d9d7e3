"""Ordered catalog collections persisted with async SQLAlchemy."""

from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from typing import Any
from typing import Callable
from typing import ClassVar
from typing import Dict
from typing import Generic
from typing import List
from typing import Optional
from typing import Tuple
from typing import Type
from typing import TypeVar

from sqlalchemy import Table
from sqlalchemy import delete
from sqlalchemy import select
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ..model import BaseModel
from ..model import Ref
from ..providers import AccountProvider
from ..providers import TimeProvider
from ..providers import system_time
from ..result import Result
from .validation import check_not_null
from .validation import check_null


ModelT = TypeVar("ModelT", bound=BaseModel)
SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

AUDIT_COLUMNS = ("created_user", "created_time", "updated_user", "updated_time")
_NOT_COPIED = frozenset(("id",) + AUDIT_COLUMNS)

logger = logging.getLogger(__name__)


def clone_row(orm_obj: Any, **overrides: Any) -> Any:
    """Return a transient copy of ``orm_obj`` without its key and audit columns.

    Args:
        orm_obj (Any): Mapped instance to copy.
        **overrides (Any): Column values replacing the copied ones.

    Returns:
        Any: New unsaved instance of the same mapped class.
    """

    orm_model = type(orm_obj)
    values: Dict[str, Any] = {}
    for column in orm_model.__table__.columns:
        if column.key in _NOT_COPIED:
            continue
        value = getattr(orm_obj, column.key)
        values[column.key] = list(value) if isinstance(value, list) else value
    values.update(overrides)
    return orm_model(**values)


class SQLAlchemySessionMixin:
    """Resolve the async session factory a facade works with."""

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.session_factory = session_factory

    def _require_session_factory(self) -> SessionFactory:
        """Return the session factory or raise an error when none was given."""

        if self.session_factory is None:
            raise RuntimeError("Database session factory is not configured")
        return self.session_factory


class MovableFacade(SQLAlchemySessionMixin, Generic[ModelT]):
    """Validate, persist and order one catalog entity.

    Records live in scopes: a top-level collection is a single scope, a child
    collection has one scope per parent. Positions inside a scope run from 0
    upwards. Every public operation returns a :class:`Result`; failures are
    reported as error events and never raised.

    Subclasses describe their entity through class attributes and refine the
    hooks :meth:`validate_data`, :meth:`resolve_references`,
    :meth:`populate`, :meth:`copy_children`, :meth:`before_remove` and
    :meth:`before_clear`.
    """

    entity: ClassVar[Type[BaseModel]]
    prefix: ClassVar[str]
    label: ClassVar[str]

    parent_orm: ClassVar[Optional[type]] = None
    parent_column: ClassVar[Optional[str]] = None
    parent_prefix: ClassVar[Optional[str]] = None
    parent_label: ClassVar[Optional[str]] = None

    # (mapped class, scope column) pairs renumbered with this collection
    positioned_children: ClassVar[Tuple[Tuple[type, str], ...]] = ()
    # deleted before this collection's own table, in order
    dependent_tables: ClassVar[Tuple[Table, ...]] = ()

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        *,
        account_provider: AccountProvider,
        time_provider: TimeProvider = system_time,
    ) -> None:
        super().__init__(session_factory=session_factory)
        self.account_provider = account_provider
        self.time_provider = time_provider
        self.logger = logger

    @property
    def orm_model(self) -> Any:
        return self.entity.__orm_model__

    def current_year(self) -> int:
        return self.time_provider().year

    # hooks

    def validate_data(self, data: ModelT, result: Result[Any]) -> None:
        """Append field validation errors for ``data`` to ``result``."""

    async def resolve_references(
        self, session: AsyncSession, data: ModelT, result: Result[Any]
    ) -> Dict[str, Any]:
        """Check records referenced by ``data`` and return them for :meth:`populate`."""

        return {}

    def populate(self, row: Any, data: ModelT, references: Dict[str, Any]) -> None:
        """Copy the values of ``data`` onto the mapped ``row``."""

        for name, value in data.column_values(exclude=("id", "position")).items():
            setattr(row, name, value)

    def copy_children(self, source: Any, copy: Any) -> None:
        """Attach deep copies of the children of ``source`` to ``copy``."""

    async def before_remove(self, session: AsyncSession, row: Any) -> None:
        """Detach rows that reference ``row`` without being owned by it."""

    async def before_clear(self, session: AsyncSession) -> None:
        for table in self.dependent_tables:
            await session.execute(delete(table))

    # contract

    async def get(self, id: Optional[int]) -> Result[Optional[ModelT]]:
        """Return the record with ``id``; the data is ``None`` when it is missing."""

        if id is None:
            return Result.error(f"{self.prefix}_ID_NULL", "ID mustn't be null.")
        async with self._require_session_factory()() as session:
            row = await session.get(self.orm_model, id)
            return Result.of(None if row is None else self.entity.from_orm(row))

    async def get_all(self) -> Result[List[ModelT]]:
        async with self._require_session_factory()() as session:
            rows = await self._rows(session)
            return Result.of([self.entity.from_orm(row) for row in rows])

    async def find(self, parent: Optional[Ref]) -> Result[List[ModelT]]:
        """Return the records belonging to ``parent`` in position order."""

        self._require_parent()
        result = self._validate_ref(parent, self.parent_prefix, self.parent_label)
        if result.is_error():
            return result
        async with self._require_session_factory()() as session:
            if not await self._parent_exists(session, parent.id):
                return self._parent_not_exist()
            rows = await self._rows(session, *self._scope_criteria(parent.id))
            return Result.of([self.entity.from_orm(row) for row in rows])

    async def add(self, data: Optional[ModelT], parent: Optional[Ref] = None) -> Result[None]:
        """Store ``data`` as a new record at the end of its scope.

        Args:
            data (Optional[ModelT]): Record without id and position.
            parent (Optional[Ref]): Owner of the record for child collections.

        Returns:
            Result[None]: Empty result, or the validation errors.
        """

        if data is None:
            return Result.error(f"{self.prefix}_NULL", f"{self.label} mustn't be null.")
        result: Result[None] = Result()
        check_null(result, self.prefix, "id", data.id)
        check_null(result, self.prefix, "position", data.position)
        self.validate_data(data, result)
        parent_id = None
        if self.parent_column is not None:
            result.extend(self._validate_ref(parent, self.parent_prefix, self.parent_label))
            parent_id = None if parent is None else parent.id
        if result.is_error():
            return result

        async with self._require_session_factory()() as session:
            async with session.begin():
                if self.parent_column is not None and not await self._parent_exists(
                    session, parent_id
                ):
                    return self._parent_not_exist()
                references = await self.resolve_references(session, data, result)
                if result.is_error():
                    return result
                row = self.orm_model()
                self.populate(row, data, references)
                if self.parent_column is not None:
                    setattr(row, self.parent_column, parent_id)
                row.position = await self._next_position(session, parent_id)
                self.stamp(row, created=True)
                session.add(row)
        self.logger.info("Added %s %s", self.label.lower(), row.id)
        return result

    async def update(self, data: Optional[ModelT], parent: Optional[Ref] = None) -> Result[None]:
        """Replace the values of a stored record, keeping its position."""

        if data is None:
            return Result.error(f"{self.prefix}_NULL", f"{self.label} mustn't be null.")
        result: Result[None] = Result()
        check_not_null(result, self.prefix, "id", data.id)
        check_not_null(result, self.prefix, "position", data.position)
        self.validate_data(data, result)
        if parent is not None:
            result.extend(self._validate_ref(parent, self.parent_prefix, self.parent_label))
        if result.is_error():
            return result

        async with self._require_session_factory()() as session:
            async with session.begin():
                if (
                    parent is not None
                    and self.parent_column is not None
                    and not await self._parent_exists(session, parent.id)
                ):
                    return self._parent_not_exist()
                row = await session.get(self.orm_model, data.id)
                if row is None or (
                    parent is not None
                    and self.parent_column is not None
                    and getattr(row, self.parent_column) != parent.id
                ):
                    return self._not_exist()
                references = await self.resolve_references(session, data, result)
                if result.is_error():
                    return result
                self.populate(row, data, references)
                self.stamp(row)
        self.logger.info("Updated %s %s", self.label.lower(), data.id)
        return result

    async def remove(self, ref: Optional[Ref]) -> Result[None]:
        """Delete a record with its children and close the gap it leaves."""

        result = self._validate_ref(ref, self.prefix, self.label)
        if result.is_error():
            return result
        async with self._require_session_factory()() as session:
            async with session.begin():
                row = await session.get(self.orm_model, ref.id)
                if row is None:
                    return self._not_exist()
                parent_id = self._parent_id(row)
                position = row.position
                await self.before_remove(session, row)
                await session.delete(row)
                await session.flush()
                await session.execute(
                    update(self.orm_model)
                    .where(
                        *self._scope_criteria(parent_id),
                        self.orm_model.position > position,
                    )
                    .values(position=self.orm_model.position - 1)
                )
        self.logger.info("Removed %s %s", self.label.lower(), ref.id)
        return result

    async def duplicate(self, ref: Optional[Ref]) -> Result[None]:
        """Deep copy a record to the end of its scope."""

        result = self._validate_ref(ref, self.prefix, self.label)
        if result.is_error():
            return result
        async with self._require_session_factory()() as session:
            async with session.begin():
                row = await session.get(self.orm_model, ref.id)
                if row is None:
                    return self._not_exist()
                copy = clone_row(
                    row, position=await self._next_position(session, self._parent_id(row))
                )
                self.stamp(copy, created=True)
                self.copy_children(row, copy)
                session.add(copy)
        self.logger.info("Duplicated %s %s as %s", self.label.lower(), ref.id, copy.id)
        return result

    async def move_up(self, ref: Optional[Ref]) -> Result[None]:
        return await self._move(ref, up=True)

    async def move_down(self, ref: Optional[Ref]) -> Result[None]:
        return await self._move(ref, up=False)

    async def update_positions(self) -> Result[None]:
        """Renumber every scope to ``0..n-1``, child collections included."""

        async with self._require_session_factory()() as session:
            async with session.begin():
                await self._renumber(session, self.orm_model, self.parent_column)
                for child_model, scope_column in self.positioned_children:
                    await self._renumber(session, child_model, scope_column)
        return Result()

    async def new_data(self) -> Result[None]:
        """Delete the whole collection together with its children."""

        async with self._require_session_factory()() as session:
            async with session.begin():
                await self.before_clear(session)
                await session.execute(delete(self.orm_model))
        self.logger.info("Cleared all %s records", self.label.lower())
        return Result()

    # helpers

    def stamp(self, row: Any, *, created: bool = False) -> None:
        """Record who touched ``row`` and when."""

        if not hasattr(row, "updated_user"):
            return
        username = self.account_provider.get_account().username
        now = self.time_provider()
        if created:
            row.created_user = username
            row.created_time = now
        row.updated_user = username
        row.updated_time = now

    async def _move(self, ref: Optional[Ref], *, up: bool) -> Result[None]:
        result = self._validate_ref(ref, self.prefix, self.label)
        if result.is_error():
            return result
        orm_model = self.orm_model
        async with self._require_session_factory()() as session:
            async with session.begin():
                row = await session.get(orm_model, ref.id)
                if row is None:
                    return self._not_exist()
                stmt = select(orm_model).where(*self._scope_criteria(self._parent_id(row)))
                if up:
                    stmt = stmt.where(orm_model.position < row.position).order_by(
                        orm_model.position.desc()
                    )
                else:
                    stmt = stmt.where(orm_model.position > row.position).order_by(
                        orm_model.position.asc()
                    )
                neighbour = await session.scalar(stmt.limit(1))
                if neighbour is None:
                    direction = "up" if up else "down"
                    return Result.error(
                        f"{self.prefix}_NOT_MOVABLE",
                        f"{self.label} can't be moved {direction}.",
                    )
                row.position, neighbour.position = neighbour.position, row.position
                self.stamp(row)
                self.stamp(neighbour)
        return result

    async def _rows(self, session: AsyncSession, *criteria: Any) -> List[Any]:
        orm_model = self.orm_model
        ordering = [orm_model.position, orm_model.id]
        if self.parent_column is not None:
            ordering.insert(0, getattr(orm_model, self.parent_column))
        stmt = select(orm_model).where(*criteria).order_by(*ordering)
        return list((await session.scalars(stmt)).all())

    async def _next_position(self, session: AsyncSession, parent_id: Optional[int]) -> int:
        rows = await session.scalars(
            select(self.orm_model.position).where(*self._scope_criteria(parent_id))
        )
        positions = list(rows.all())
        return max(positions) + 1 if positions else 0

    @staticmethod
    async def _renumber(
        session: AsyncSession, orm_model: Any, scope_column: Optional[str]
    ) -> None:
        ordering = [orm_model.position, orm_model.id]
        if scope_column is not None:
            ordering.insert(0, getattr(orm_model, scope_column))
        rows = (await session.scalars(select(orm_model).order_by(*ordering))).all()
        counters: Dict[Any, int] = {}
        for row in rows:
            scope = getattr(row, scope_column) if scope_column is not None else None
            position = counters.get(scope, 0)
            row.position = position
            counters[scope] = position + 1

    def _scope_criteria(self, parent_id: Optional[int]) -> List[Any]:
        if self.parent_column is None:
            return []
        return [getattr(self.orm_model, self.parent_column) == parent_id]

    def _parent_id(self, row: Any) -> Optional[int]:
        if self.parent_column is None:
            return None
        return getattr(row, self.parent_column)

    async def _parent_exists(self, session: AsyncSession, parent_id: Optional[int]) -> bool:
        found = await session.scalar(
            select(self.parent_orm.id).where(self.parent_orm.id == parent_id)
        )
        return found is not None

    def _require_parent(self) -> None:
        if self.parent_orm is None:
            raise RuntimeError(f"{self.label} records have no parent collection")

    @staticmethod
    def _validate_ref(ref: Optional[Ref], prefix: str, label: str) -> Result[Any]:
        result: Result[Any] = Result()
        if ref is None:
            result.add_error(f"{prefix}_NULL", f"{label} mustn't be null.")
        elif ref.id is None:
            result.add_error(f"{prefix}_ID_NULL", "ID mustn't be null.")
        return result

    def _not_exist(self) -> Result[Any]:
        return Result.error(f"{self.prefix}_NOT_EXIST", f"{self.label} doesn't exist.")

    def _parent_not_exist(self) -> Result[Any]:
        return Result.error(
            f"{self.parent_prefix}_NOT_EXIST", f"{self.parent_label} doesn't exist."
        )


__all__ = [
    "AUDIT_COLUMNS",
    "MovableFacade",
    "SQLAlchemySessionMixin",
    "SessionFactory",
    "clone_row",
]
