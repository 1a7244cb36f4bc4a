from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(url: str):
    """Build an engine for ``url``.

    In-memory SQLite gets a single shared connection so every worker thread
    sees the same database.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine):
    # Objects stay readable after commit; callers serialize them right away.
    return sessionmaker(autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine, base):
    base.metadata.create_all(bind=engine)


class ToDictMixIn:
    def to_dict(self):
        return {c.name: getattr(self, c.name) for c in self.__table__.columns}


# Largest id an Integer primary key column holds on every supported backend.
MAX_ID = 2**31 - 1
