"""SQLAlchemy-backed key-value storage.

Each storage key is one ``AssignmentRecord`` row holding the whole
assignment table as JSON.  Every call opens its own short session and
commits before returning, so writes are durable as soon as ``set`` or
``remove`` returns.
"""

from __future__ import annotations

import logging
from typing import Mapping

from sqlalchemy import Engine, create_engine, delete
from sqlalchemy.orm import Session, sessionmaker

from splitkit.core.config import settings
from splitkit.models.assignment_record import AssignmentRecord
from splitkit.models.base import Base

logger = logging.getLogger(__name__)


class SQLStorage:
    """Persist assignment records in a SQL database.

    Parameters
    ----------
    bind : str | Engine | None
        Database URL or an existing engine.  Defaults to
        ``settings.STORAGE_URL``.
    """

    def __init__(self, bind: str | Engine | None = None) -> None:
        if bind is None:
            bind = settings.STORAGE_URL
        self.engine = create_engine(bind) if isinstance(bind, str) else bind
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine, tables=[AssignmentRecord.__table__])

    def _session(self) -> Session:
        return self._session_factory()

    def get(self, key: str) -> dict | None:
        with self._session() as db:
            record = db.get(AssignmentRecord, key)
            if record is None:
                return None
            return record.values

    def set(self, key: str, value: Mapping[str, str]) -> None:
        with self._session() as db, db.begin():
            record = db.get(AssignmentRecord, key)
            if record is None:
                db.add(AssignmentRecord(key=key, values=dict(value)))
            else:
                record.values = dict(value)
        logger.debug("Stored %d assignments under %r", len(value), key)

    def remove(self, key: str) -> None:
        with self._session() as db, db.begin():
            db.execute(delete(AssignmentRecord).where(AssignmentRecord.key == key))
