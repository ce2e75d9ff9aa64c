from fastapi import Request
from sqlalchemy import create_engine, exists, func, literal, select
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_db_engine(database_url: str):
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            # A single shared connection keeps the in-memory database alive
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Enables pessimistic disconnect handling
        pool_recycle=300,    # Recycle connections every 5 minutes
        echo=False
    )


def create_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def _like_pattern(needle: str) -> str:
    escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def json_array_contains(db, column, needle: str):
    """Filter clause: some string element of a JSON array column contains ``needle``.

    Elements are matched one by one, so a needle never spans two elements or
    the JSON punctuation between them.
    """
    dialect = db.get_bind().dialect.name

    if dialect == "mysql":
        return func.json_search(column, "one", _like_pattern(needle)).isnot(None)

    if dialect == "postgresql":
        elements = func.json_array_elements_text(column).table_valued("value")
    else:
        elements = func.json_each(column).table_valued("value")

    return exists(
        select(literal(1)).select_from(elements).where(
            elements.c.value.icontains(needle, autoescape=True)
        )
    )
