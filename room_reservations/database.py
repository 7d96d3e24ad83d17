import logging
import os
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.pool import QueuePool
from room_reservations.config import settings

logger = logging.getLogger(__name__)

# Execution option that makes the SQLite "begin" hook take the write lock up front
BEGIN_IMMEDIATE = "sqlite_begin_immediate"


# ─── SQLite Pragmas & Transaction Start ────────────────────────────────────────
def _configure_sqlite(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # Hand BEGIN over to SQLAlchemy so reads inside a transaction are covered too
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.execute(f"PRAGMA busy_timeout = {settings.DATABASE_BUSY_TIMEOUT_MS}")
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute("PRAGMA synchronous = NORMAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):
        if conn.get_execution_options().get(BEGIN_IMMEDIATE):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


# ─── Engine ────────────────────────────────────────────────────────────────────
def build_engine(database_url: str) -> Engine:
    """
    Create the process-wide engine.

    SQLite files get their directory created, foreign keys switched on, a WAL
    journal and a bounded busy wait. Other backends use a QueuePool.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(
            database_url,
            poolclass=QueuePool,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
            pool_pre_ping=True,          # Detect stale connections before using them
            echo=settings.DATABASE_ECHO,
        )

    if url.database and url.database != ":memory:":
        directory = os.path.dirname(os.path.abspath(url.database))
        if not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)
            logger.info(f"Created database directory {directory}")

    engine = create_engine(
        database_url,
        connect_args={
            "check_same_thread": False,
            "timeout": settings.DATABASE_BUSY_TIMEOUT_MS / 1000,
        },
        echo=settings.DATABASE_ECHO,
    )
    _configure_sqlite(engine)
    return engine


engine = build_engine(settings.DATABASE_URL)


# ─── Session Factory ───────────────────────────────────────────────────────────
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,      # Serialize rows after commit without reloading
)


# ─── Base Model ────────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.
    All models in room_reservations/models/ should inherit from this class.
    """
    pass


# ─── Dependency Injection ──────────────────────────────────────────────────────
def get_db():
    """
    FastAPI dependency that provides a database session per request.
    Automatically closes session after request completes.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ─── Transactions ──────────────────────────────────────────────────────────────
@contextmanager
def write_transaction(db: Session):
    """
    Run a check-then-mutate sequence as one transaction.

    On SQLite the transaction starts with BEGIN IMMEDIATE, so the write lock
    is held before the first check runs and concurrent writers queue behind
    it (up to DATABASE_BUSY_TIMEOUT_MS). Commits on success; any exception
    rolls back before it propagates.

    Usage:
        with write_transaction(db):
            if not is_slot_free(db, ...):
                raise ReservationConflictException()
            db.add(reservation)
            db.flush()
    """
    if db.in_transaction():
        # Close the implicit read transaction so the lock is taken up front
        db.commit()
    db.connection(execution_options={BEGIN_IMMEDIATE: True})
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


# ─── Schema ────────────────────────────────────────────────────────────────────
def init_database() -> None:
    """Create missing tables. Alembic manages the schema outside of development."""
    import room_reservations.models  # noqa: F401  registers models on Base.metadata
    Base.metadata.create_all(bind=engine)


# ─── Health Check ──────────────────────────────────────────────────────────────
def check_db_connection() -> bool:
    """Verify database is reachable. Used at startup."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
