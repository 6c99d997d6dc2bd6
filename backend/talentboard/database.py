from sqlalchemy import String, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.sql.functions import FunctionElement

from talentboard.config import settings


class Base(DeclarativeBase):
    pass


class fold(FunctionElement):
    """Case-folded text for case-insensitive comparison.

    SQLite's built-in ``lower()`` only folds ASCII, so on SQLite this calls
    the ``casefold`` function registered on every connection below.
    """

    type = String()
    name = "fold"
    inherit_cache = True


@compiles(fold)
def _fold_default(element, compiler, **kw):
    return "lower(%s)" % compiler.process(element.clauses, **kw)


@compiles(fold, "sqlite")
def _fold_sqlite(element, compiler, **kw):
    return "casefold(%s)" % compiler.process(element.clauses, **kw)


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_conn.create_function("casefold", 1, _casefold)


def get_engine(url: str | None = None) -> Engine:
    url = url or settings.db_url
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.db_connect_timeout_seconds,
            },
        )
        event.listen(engine, "connect", _set_sqlite_pragmas)
        return engine
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"connect_timeout": settings.db_connect_timeout_seconds},
    )


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None):
    """Create missing tables and verify the store answers a trivial query.

    Raises the driver's error unchanged; callers decide whether it is fatal.
    """
    bind = bind or engine
    import talentboard.models  # noqa: F401  registers the tables

    Base.metadata.create_all(bind)
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
