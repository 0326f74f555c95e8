import logging
import time

from sqlalchemy import create_engine, event, exc, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.settings import DatabaseSettings
from app.utils.errors import StorageError

logger = logging.getLogger(__name__)

# Integer columns are int4 on PostgreSQL; no stored id can exceed this
MAX_ID = 2**31 - 1

Base = declarative_base()


def build_url(settings: DatabaseSettings) -> URL:
    """Resolve the SQLAlchemy URL for the configured backend"""
    if settings.url:
        return make_url(settings.url)

    query = {}
    if settings.ssl_mode:
        query["sslmode"] = settings.ssl_mode
    return URL.create(
        "postgresql+psycopg2",
        username=settings.user,
        password=settings.password,
        host=settings.host,
        port=settings.port,
        database=settings.name,
        query=query,
    )


def _install_idle_eviction(engine: Engine, max_idle: float) -> None:
    # Connections parked in the pool longer than max_idle are thrown away on
    # checkout; raising DisconnectionError makes the pool retry with a fresh one.
    @event.listens_for(engine, "checkin")
    def _on_checkin(dbapi_conn, record):
        record.info["checked_in_at"] = time.monotonic()

    @event.listens_for(engine, "checkout")
    def _on_checkout(dbapi_conn, record, proxy):
        parked_at = record.info.pop("checked_in_at", None)
        if parked_at is not None and time.monotonic() - parked_at > max_idle:
            raise exc.DisconnectionError("connection idle for too long")


class Database:
    """Connection pool plus session factory shared by the SQL repository"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        """Build the pool and verify the backend answers before returning.

        Raises StorageError if the URL is malformed or the database is
        unreachable, so a broken configuration never survives startup.
        """
        try:
            url = build_url(settings)
        except exc.ArgumentError as e:
            raise StorageError("parse", "database config", str(e)) from e

        kwargs = {"pool_pre_ping": True}
        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                # A single shared connection keeps the in-memory database alive
                kwargs.update(
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                kwargs["connect_args"] = {"check_same_thread": False}
        else:
            kwargs.update(
                pool_size=settings.pool_max_conns,
                max_overflow=0,
                pool_recycle=int(settings.pool_max_conn_lifetime),
            )
            if settings.statement_timeout:
                timeout_ms = int(settings.statement_timeout * 1000)
                kwargs["connect_args"] = {"options": f"-c statement_timeout={timeout_ms}"}

        try:
            engine = create_engine(url, **kwargs)
        except (exc.ArgumentError, ImportError) as e:
            raise StorageError("create", "connection pool", str(e)) from e

        if url.get_backend_name() != "sqlite":
            _install_idle_eviction(engine, settings.pool_max_conn_idle_time)

        database = cls(engine)
        database.ping()
        logger.info(
            "Database ready backend=%s host=%s db=%s",
            url.get_backend_name(), url.host, url.database,
        )
        return database

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except exc.SQLAlchemyError as e:
            self.engine.dispose()
            raise StorageError("connect", "database", str(e)) from e

    def create_all(self) -> None:
        # Models register themselves on Base when imported
        import app.models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except exc.SQLAlchemyError as e:
            raise StorageError("create", "schema", str(e)) from e

    def session(self) -> Session:
        return self.SessionLocal()

    def close(self) -> None:
        self.engine.dispose()

