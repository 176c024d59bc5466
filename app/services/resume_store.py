import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, NamedTuple, Optional

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.errors import PersistenceError
from app.models import ResumeCreate

logger = logging.getLogger(__name__)

metadata = sa.MetaData()

resumes = sa.Table(
    "resumes",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("name", sa.Text, nullable=True),
    sa.Column("email", sa.Text, nullable=True),
    sa.Column("phone", sa.Text, nullable=True),
    sa.Column("linkedin", sa.Text, nullable=True),
    sa.Column("summary", sa.Text, nullable=True),
    sa.Column("work_experience", sa.JSON, nullable=True),
    sa.Column("education", sa.JSON, nullable=True),
    sa.Column("projects", sa.JSON, nullable=True),
    sa.Column("certifications", sa.JSON, nullable=True),
    sa.Column("technical_skills", sa.JSON, nullable=True),
    sa.Column("soft_skills", sa.JSON, nullable=True),
    sa.Column("rating", sa.Integer, nullable=True),
    sa.Column("feedback", sa.Text, nullable=True),
    sa.Column("suggested_skills", sa.JSON, nullable=True),
    sa.Column("file_name", sa.Text, nullable=False),
    sa.Column("raw_text", sa.Text, nullable=True),
    sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
)

SUMMARY_COLUMNS = (
    resumes.c.id,
    resumes.c.name,
    resumes.c.email,
    resumes.c.file_name,
    resumes.c.created_at,
)


class InsertedRow(NamedTuple):
    id: int
    created_at: datetime


def create_db_engine(settings: Settings) -> Engine:
    url = sa.engine.make_url(settings.sqlalchemy_url)
    if url.get_backend_name() == "sqlite":
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return sa.create_engine(url, echo=settings.db_echo, **kwargs)
    return sa.create_engine(
        url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        pool_pre_ping=True,
    )


class ResumeStore:
    """Parameterized reads and writes against the resumes table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(sa.select(sa.literal(1)))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database unreachable: {e}") from e

    def _insert(self, values: Dict[str, Any]) -> InsertedRow:
        values["created_at"] = datetime.now(timezone.utc)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(sa.insert(resumes).values(**values))
                new_id = result.inserted_primary_key[0]
                created_at = conn.execute(
                    sa.select(resumes.c.created_at).where(resumes.c.id == new_id)
                ).scalar_one()
        except SQLAlchemyError as e:
            logger.exception("Insert into resumes failed")
            raise PersistenceError(f"Database error: {e}") from e
        return InsertedRow(id=new_id, created_at=created_at)

    def insert_fallback(self, file_name: str, raw_text: str) -> InsertedRow:
        # every structured column keeps its default: null text, empty lists
        record = ResumeCreate(file_name=file_name, raw_text=raw_text)
        return self._insert(record.model_dump(mode="json"))

    def insert_full(self, record: ResumeCreate) -> InsertedRow:
        return self._insert(record.model_dump(mode="json"))

    def list_summaries(self) -> List[Dict[str, Any]]:
        query = sa.select(*SUMMARY_COLUMNS).order_by(
            resumes.c.created_at.desc(), resumes.c.id.desc()
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database error: {e}") from e
        return [dict(row) for row in rows]

    def get(self, resume_id: int) -> Optional[Dict[str, Any]]:
        query = sa.select(resumes).where(resumes.c.id == resume_id)
        try:
            with self.engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Database error: {e}") from e
        return dict(row) if row is not None else None
