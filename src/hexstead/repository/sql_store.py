"""SQL-backed store for Hexstead save blobs."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hexstead.database import get_session_factory, init_db
from hexstead.models import SaveBlob


class SqlKeyValueStore:
    """Persist blobs as rows of the ``save_blobs`` table."""

    def __init__(self, engine: Engine, *, create_schema: bool = True) -> None:
        self.engine = engine
        self._sessions: sessionmaker[Session] = get_session_factory(engine)
        if create_schema:
            init_db(engine)

    def get(self, key: str) -> str | None:
        with self._sessions() as session:
            row = session.get(SaveBlob, key)
            return row.payload if row is not None else None

    def set(self, key: str, value: str) -> None:
        with self._sessions.begin() as session:
            row = session.get(SaveBlob, key)
            if row is None:
                session.add(SaveBlob(key=key, payload=value))
            else:
                row.payload = value

    def delete(self, key: str) -> None:
        with self._sessions.begin() as session:
            session.execute(delete(SaveBlob).where(SaveBlob.key == key))

    def keys(self) -> list[str]:
        with self._sessions() as session:
            return list(session.scalars(select(SaveBlob.key).order_by(SaveBlob.key)))

    def clear(self) -> None:
        with self._sessions.begin() as session:
            session.execute(delete(SaveBlob))
