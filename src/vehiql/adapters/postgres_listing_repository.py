"""PostgreSQL implementation of ListingRepository."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Sequence
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from vehiql.domain.errors import RepositoryError
from vehiql.domain.listing import SortBy, Window
from vehiql.domain.predicates import Contains, Equals, Predicate, Range
from vehiql.infra.db.models.listing import ListingRow
from vehiql.ports.listing_repository import ListingRepository, Record, SearchResult

if TYPE_CHECKING:
    from sqlalchemy.sql import ColumnElement, Select

logger = logging.getLogger(__name__)


def _column(name: str) -> InstrumentedAttribute[Any]:
    try:
        return getattr(ListingRow, name)
    except AttributeError:
        raise ValueError(f"Unknown listing column: {name!r}")


def _parse_id(listing_id: str) -> UUID | None:
    try:
        return UUID(listing_id)
    except ValueError:
        return None


class PostgresListingRepository(ListingRepository):
    """
    PostgreSQL implementation of ListingRepository.

    - Lowers predicates to SQLAlchemy expressions (values are always bound
      parameters; LIKE wildcards in search terms are escaped)
    - Returns total_count via COUNT(*) over the same predicates
    - Orders by the sort column, then id, so windows are stable
    - Converts ListingRow (infrastructure) to plain records
    - Wraps SQLAlchemy failures in RepositoryError
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def search(
        self, predicates: Sequence[Predicate], sort: SortBy, window: Window
    ) -> SearchResult:
        """
        Search listings with predicates, sort and window.

        Executes two queries:
        1. COUNT(*) over the filtered set (before windowing)
        2. SELECT with ORDER BY / OFFSET / LIMIT for the window
        """
        criteria = self._lower_all(predicates)

        count_query = select(func.count()).select_from(ListingRow).where(*criteria)
        query = (
            select(ListingRow)
            .where(*criteria)
            .order_by(*self._order_by(sort))
            .offset(window.offset)
            .limit(window.limit)
        )

        with self._translate_errors("search"):
            total_count = self._session.execute(count_query).scalar() or 0
            rows = self._session.execute(query).scalars().all()

        return SearchResult(rows=[self._to_record(row) for row in rows], total_count=total_count)

    def list_rows(
        self, predicates: Sequence[Predicate], sort: SortBy | None = None
    ) -> list[Record]:
        query = select(ListingRow).where(*self._lower_all(predicates))
        if sort is not None:
            query = query.order_by(*self._order_by(sort))

        with self._translate_errors("list_rows"):
            rows = self._session.execute(query).scalars().all()

        return [self._to_record(row) for row in rows]

    def count(self, predicates: Sequence[Predicate]) -> int:
        query = select(func.count()).select_from(ListingRow).where(*self._lower_all(predicates))
        with self._translate_errors("count"):
            return self._session.execute(query).scalar() or 0

    def get_by_id(self, listing_id: str) -> Record | None:
        """
        Get listing by ID.

        Returns:
            Record if found, None otherwise (including malformed UUIDs)
        """
        row = self._get_row(listing_id)
        return self._to_record(row) if row is not None else None

    def add(self, values: Mapping[str, Any]) -> Record:
        row = ListingRow(**values)
        with self._translate_errors("add"):
            self._session.add(row)
            self._session.flush()
            # Pull server-side defaults (timestamps) back into the row
            self._session.refresh(row)
        return self._to_record(row)

    def update(self, listing_id: str, values: Mapping[str, Any]) -> Record | None:
        row = self._get_row(listing_id)
        if row is None:
            return None

        for name, value in values.items():
            _column(name)
            setattr(row, name, value)

        with self._translate_errors("update"):
            self._session.flush()
            self._session.refresh(row)
        return self._to_record(row)

    def delete(self, listing_id: str) -> bool:
        row = self._get_row(listing_id)
        if row is None:
            return False

        with self._translate_errors("delete"):
            self._session.delete(row)
            self._session.flush()
        return True

    def _get_row(self, listing_id: str) -> ListingRow | None:
        parsed = _parse_id(listing_id)
        if parsed is None:
            return None
        query = select(ListingRow).where(ListingRow.id == parsed)
        with self._translate_errors("get_by_id"):
            return self._session.execute(query).scalar_one_or_none()

    def _lower_all(self, predicates: Sequence[Predicate]) -> list[ColumnElement[bool]]:
        return [self._lower(predicate) for predicate in predicates]

    def _lower(self, predicate: Predicate) -> ColumnElement[bool]:
        """
        Lower one predicate to a SQL expression.

        Args:
            predicate: Equals, Contains or Range

        Returns:
            Boolean SQL expression with bound parameters
        """
        if isinstance(predicate, Equals):
            return _column(predicate.field) == predicate.value

        if isinstance(predicate, Contains):
            return or_(
                *(
                    _column(name).icontains(predicate.substring, autoescape=True)
                    for name in predicate.fields
                )
            )

        if isinstance(predicate, Range):
            column = _column(predicate.field)
            bounds = []
            if predicate.minimum is not None:
                bounds.append(column >= predicate.minimum)
            if predicate.maximum is not None:
                bounds.append(column <= predicate.maximum)
            return and_(*bounds)

        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _order_by(self, sort: SortBy) -> tuple[Any, ...]:
        column = _column(sort.column)
        primary = column.desc() if sort.descending else column.asc()
        return (primary, ListingRow.id.asc())

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            error_type = type(exc).__name__
            logger.error(
                "Listing store operation failed",
                extra={
                    "operation": operation,
                    "error_type": error_type,
                    "error_message": str(exc),
                },
            )
            # Driver text carries SQL and bound values; callers only see the operation
            raise RepositoryError(
                f"Listing store {operation} failed", operation=operation, error_type=error_type
            ) from exc

    def _to_record(self, row: ListingRow) -> Record:
        """
        Convert database model (ListingRow) to a plain record.

        Args:
            row: SQLAlchemy ListingRow model

        Returns:
            Dict keyed by column name; id as string
        """
        record = {column.key: getattr(row, column.key) for column in ListingRow.__table__.columns}
        record["id"] = str(row.id)  # Convert UUID to string
        record["images"] = list(row.images or [])
        return record
