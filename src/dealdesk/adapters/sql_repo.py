# src/dealdesk/adapters/sql_repo.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import JSON, Column, Field, Session, SQLModel, create_engine

from dealdesk.adapters.storage import DEFAULT_STORAGE_KEY
from dealdesk.domain.errors import PersistenceError
from dealdesk.domain.inputs import InputRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InputRecordRow(SQLModel, table=True):
    __tablename__ = "input_records"

    key: str = Field(primary_key=True)
    updated_at: datetime = Field(default_factory=_utcnow, index=True)

    payload: dict[str, Any] = Field(sa_column=Column(JSON))


class SqlInputStorage:
    def __init__(self, uri: str = "sqlite:///dealdesk.db", key: str = DEFAULT_STORAGE_KEY):
        self.key = key
        try:
            self.engine = create_engine(uri, echo=False)
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot open input storage at {uri}: {e}") from e

    def load(self) -> InputRecord | None:
        try:
            with Session(self.engine) as session:
                row = session.get(InputRecordRow, self.key)
                payload = row.payload if row is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot read stored inputs: {e}") from e
        if payload is None:
            return None
        return InputRecord.from_payload(payload)

    def save(self, record: InputRecord) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(InputRecordRow, self.key)
                if row is None:
                    row = InputRecordRow(key=self.key, payload=record.to_payload())
                else:
                    row.payload = record.to_payload()
                    row.updated_at = _utcnow()
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot write stored inputs: {e}") from e

    def clear(self) -> None:
        try:
            with Session(self.engine) as session:
                row = session.get(InputRecordRow, self.key)
                if row is not None:
                    session.delete(row)
                    session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"cannot clear stored inputs: {e}") from e
