from contextlib import contextmanager

from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool

from .settings import settings
from .logging import get_logger

logger = get_logger("carpool.database")

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine_kwargs = {"connect_args": connect_args}
if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
    # One shared connection, otherwise every thread sees its own empty database
    engine_kwargs["poolclass"] = StaticPool

engine = create_engine(settings.DATABASE_URL, **engine_kwargs)

def create_db_and_tables():
    SQLModel.metadata.create_all(engine)

def get_session():
    with Session(engine) as session:
        yield session

@contextmanager
def unit_of_work(session: Session):
    """
    Transaction scope: commits when the block finishes, rolls back every
    write made inside it when the block raises.
    """
    try:
        yield session
        session.commit()
    except Exception:
        logger.warning("Rolling back unit of work")
        session.rollback()
        raise
