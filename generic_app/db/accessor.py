"""
Generic, name-keyed access to the persistence store.

The CRUD engine only ever talks to a ``PersistenceAccessor`` resolved by the
entity's lowercase name; ``SqlAlchemyAccessor`` is the default implementation.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import DateTime, MetaData, Table, delete, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from generic_app.config.domain import EntityConfig
from generic_app.core.errors import ModelNotFound, NotFound
from generic_app.db.tables import build_entity_table, new_id

log = logging.getLogger(__name__)

Record = Dict[str, Any]


class PersistenceAccessor(ABC):
    """CRUD operations over one model; rows are plain dicts."""

    @abstractmethod
    def create(self, data: Record) -> Record:
        pass

    @abstractmethod
    def find_unique(self, id: str) -> Optional[Record]:
        pass

    @abstractmethod
    def find_many(
        self,
        where: Optional[Record] = None,
        order_by: Optional[Dict[str, str]] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> List[Record]:
        pass

    @abstractmethod
    def update(self, id: str, data: Record) -> Record:
        """Update a row; raises NotFound when no row has this id."""
        pass

    @abstractmethod
    def delete(self, id: str) -> Record:
        """Delete a row and return it; raises NotFound when no row has this id."""
        pass

    @abstractmethod
    def count(self, where: Optional[Record] = None) -> int:
        pass


class AccessorRegistry:
    """Maps lowercase model keys to their accessors."""

    def __init__(self):
        self._accessors: Dict[str, PersistenceAccessor] = {}

    def register(self, model_key: str, accessor: PersistenceAccessor) -> None:
        self._accessors[model_key.lower()] = accessor

    def lookup(self, model_key: str) -> Optional[PersistenceAccessor]:
        return self._accessors.get(model_key.lower())

    def get(self, model_key: str) -> PersistenceAccessor:
        accessor = self.lookup(model_key)
        if accessor is None:
            raise ModelNotFound(model_key)
        return accessor


class SqlAlchemyAccessor(PersistenceAccessor):
    def __init__(self, table: Table, session_factory: sessionmaker):
        self.table = table
        self.session_factory = session_factory

    def _bind(self, data: Record) -> Record:
        values = dict(data)
        for key, value in data.items():
            column = self.table.c.get(key)
            if column is not None and isinstance(column.type, DateTime) and isinstance(value, str):
                values[key] = datetime.fromisoformat(value)
        return values

    def _where(self, stmt, where: Optional[Record]):
        for key, value in (where or {}).items():
            stmt = stmt.where(self.table.c[key] == value)
        return stmt

    def create(self, data: Record) -> Record:
        values = self._bind(data)
        values.setdefault("id", new_id())
        with self.session_factory() as session:
            session.execute(insert(self.table).values(**values))
            session.commit()
        log.debug("Inserted %s into %s", values["id"], self.table.name)
        return self.find_unique(values["id"])

    def find_unique(self, id: str) -> Optional[Record]:
        with self.session_factory() as session:
            row = session.execute(
                select(self.table).where(self.table.c.id == id)
            ).mappings().first()
        return dict(row) if row else None

    def find_many(
        self,
        where: Optional[Record] = None,
        order_by: Optional[Dict[str, str]] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> List[Record]:
        stmt = self._where(select(self.table), where)
        for key, direction in (order_by or {}).items():
            column = self.table.c[key]
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        with self.session_factory() as session:
            rows = session.execute(stmt).mappings().all()
        return [dict(row) for row in rows]

    def update(self, id: str, data: Record) -> Record:
        if not data:
            existing = self.find_unique(id)
            if existing is None:
                raise NotFound(f"Record {id} not found in {self.table.name}")
            return existing
        with self.session_factory() as session:
            result = session.execute(
                update(self.table).where(self.table.c.id == id).values(**self._bind(data))
            )
            matched = result.rowcount
            session.commit()
        if matched == 0:
            raise NotFound(f"Record {id} not found in {self.table.name}")
        return self.find_unique(id)

    def delete(self, id: str) -> Record:
        existing = self.find_unique(id)
        if existing is None:
            raise NotFound(f"Record {id} not found in {self.table.name}")
        with self.session_factory() as session:
            session.execute(delete(self.table).where(self.table.c.id == id))
            session.commit()
        return existing

    def count(self, where: Optional[Record] = None) -> int:
        stmt = self._where(select(func.count()).select_from(self.table), where)
        with self.session_factory() as session:
            return session.execute(stmt).scalar_one()


def init_models(entity: EntityConfig, engine: Engine) -> AccessorRegistry:
    """Create the entity table if needed and register its accessor."""
    metadata = MetaData()
    table = build_entity_table(entity, metadata)
    metadata.create_all(engine)

    registry = AccessorRegistry()
    registry.register(entity.model_key, SqlAlchemyAccessor(table, sessionmaker(bind=engine, expire_on_commit=False)))
    log.info("Registered accessor for %s", entity.model_key, extra={"entity": entity.name})
    return registry
