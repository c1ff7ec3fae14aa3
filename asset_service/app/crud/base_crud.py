import logging
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Uuid, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.database import Base, SessionLocal
from shared.core.exceptions import NotFoundException, ValidationException
from shared.core.schemas import OrderBy, PaginatedResult, PaginationOptions, SortDirection
from shared.core.transaction import run_transaction

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

FILTER_OPERATORS = {
    "eq": lambda column, value: column == value,
    "ne": lambda column, value: column != value,
    "in": lambda column, value: column.in_(value),
    "nin": lambda column, value: column.not_in(value),
    "gt": lambda column, value: column > value,
    "gte": lambda column, value: column >= value,
    "lt": lambda column, value: column < value,
    "lte": lambda column, value: column <= value,
}


def to_record_data(payload: Union[BaseModel, Mapping[str, Any]]) -> Dict[str, Any]:
    """Plain dict of the fields actually supplied by the caller."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=True)
    return dict(payload)


class RecordStore(Generic[ModelType]):
    """
    Transactional CRUD over one model.

    Every operation accepts an optional session; without one it runs in its
    own unit of work. Deletes are soft: they only clear the `active` flag.
    """

    def __init__(self, model: Type[ModelType], session_factory=SessionLocal):
        self.model = model
        self.session_factory = session_factory
        mapper = inspect(model)
        self._columns = {column.key for column in mapper.column_attrs}
        self._uuid_columns = {
            column.key for column in mapper.column_attrs
            if isinstance(column.columns[0].type, Uuid)
        }
        self._required = {
            column.key for column in mapper.column_attrs
            if not column.columns[0].nullable and not column.columns[0].primary_key
        }
        self._defaulted = {
            column.key for column in mapper.column_attrs
            if column.columns[0].default is not None
        }

    def transaction(self, db: Optional[Session], work):
        return run_transaction(db, work, self.session_factory)

    # ----------------- Query helpers -----------------

    def _column(self, field: str):
        if field not in self._columns:
            raise ValidationException(
                f"Unknown field '{field}' for {self.model.__name__}")
        return getattr(self.model, field)

    def coerce(self, field: str, value):
        if field not in self._uuid_columns or value is None or isinstance(value, UUID):
            return value
        if isinstance(value, (list, tuple, set)):
            return [self.coerce(field, item) for item in value]
        try:
            return UUID(str(value))
        except ValueError:
            raise ValidationException(f"Invalid identifier for '{field}': {value}")

    def build_filters(self, filters: Optional[Mapping[str, Any]]) -> list:
        conditions = []
        for field, value in (filters or {}).items():
            column = self._column(field)

            if not isinstance(value, Mapping):
                conditions.append(column.is_(None) if value is None
                                  else column == self.coerce(field, value))
                continue

            for operator, operand in value.items():
                operator = operator.lstrip("$")
                if operator not in FILTER_OPERATORS:
                    raise ValidationException(
                        f"Unsupported filter operator '{operator}' on '{field}'")
                conditions.append(
                    FILTER_OPERATORS[operator](column, self.coerce(field, operand)))

        return conditions

    def build_ordering(self, order_by: Optional[List[OrderBy]]) -> list:
        ordering = []
        for item in order_by or []:
            if isinstance(item, Mapping):
                item = OrderBy(**item)
            column = self._column(item.field)
            ordering.append(column.desc() if item.direction ==
                            SortDirection.desc else column.asc())
        return ordering

    def _check_fields(self, data: Mapping[str, Any]):
        unknown = sorted(set(data) - self._columns)
        if unknown:
            raise ValidationException(
                f"Unknown fields for {self.model.__name__}: {', '.join(unknown)}",
                errors=[{"path": field, "messages": ["field is not allowed"]} for field in unknown],
            )

        missing = sorted(field for field in self._required if field in data and data[field] is None)
        if missing:
            raise ValidationException(
                f"Required fields for {self.model.__name__} cannot be empty: {', '.join(missing)}",
                errors=[{"path": field, "messages": ["field is required"]} for field in missing],
            )

    def _flush(self, session: Session):
        try:
            session.flush()
        except IntegrityError as e:
            logger.warning("Rejected %s write: %s", self.model.__name__, e.orig)
            raise ValidationException(f"Invalid data for {self.model.__name__}")

    # ----------------- Operations -----------------

    def get(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        pagination: Optional[PaginationOptions] = None,
        order_by: Optional[List[OrderBy]] = None,
        count: bool = False,
        db: Optional[Session] = None,
    ) -> Union[PaginatedResult, List[ModelType], int]:
        def work(session: Session):
            query = session.query(self.model).filter(*self.build_filters(filters))

            if count:
                return query.count()

            ordering = self.build_ordering(order_by)
            if ordering:
                query = query.order_by(*ordering)

            if pagination and pagination.paginate:
                total = query.order_by(None).count()
                docs = (
                    query
                    .offset((pagination.page - 1) * pagination.limit)
                    .limit(pagination.limit)
                    .all()
                )
                return PaginatedResult.build(docs, total, pagination.page, pagination.limit)

            return query.all()

        return self.transaction(db, work)

    def get_by_id(self, record_id: UUID, db: Optional[Session] = None) -> Optional[ModelType]:
        if record_id is None:
            return None
        record_id = self.coerce("id", record_id)
        return self.transaction(db, lambda session: session.get(self.model, record_id))

    def create(self, data: Mapping[str, Any], db: Optional[Session] = None) -> ModelType:
        data = to_record_data(data)
        data.pop("id", None)
        # null on a column with a default means "use the default"
        data = {key: value for key, value in data.items()
                if value is not None or key not in self._required & self._defaulted}
        self._check_fields(data)
        data = {key: self.coerce(key, value) for key, value in data.items()}

        def work(session: Session):
            record = self.model(**data)
            session.add(record)
            self._flush(session)
            logger.debug("Created %s %s", self.model.__name__, record.id)
            return record

        return self.transaction(db, work)

    def update(self, data: Mapping[str, Any], db: Optional[Session] = None) -> ModelType:
        data = to_record_data(data)
        record_id = data.pop("id", None)
        if not record_id:
            raise ValidationException(f"{self.model.__name__} id is required")
        self._check_fields(data)
        record_id = self.coerce("id", record_id)
        data = {key: self.coerce(key, value) for key, value in data.items()}

        def work(session: Session):
            record = session.get(self.model, record_id)
            if not record:
                raise NotFoundException(f"{self.model.__name__} not found")

            for key, value in data.items():
                setattr(record, key, value)
            self._flush(session)
            return record

        return self.transaction(db, work)

    def delete(self, record_id: UUID, db: Optional[Session] = None) -> bool:
        record_id = self.coerce("id", record_id)

        def work(session: Session):
            record = session.get(self.model, record_id)
            if not record:
                raise NotFoundException(f"{self.model.__name__} not found")

            if not record.active:
                return False

            record.active = False
            session.flush()
            logger.debug("Soft deleted %s %s", self.model.__name__, record_id)
            return True

        return self.transaction(db, work)
