from typing import Iterator

from sqlalchemy import create_engine, MetaData
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from settings import DATABASE_URL, get_settings

# Create a SQLAlchemy engine and base class
engine = create_engine(DATABASE_URL, echo=get_settings().sql_echo)
metadata = MetaData()
Base = declarative_base(metadata=metadata)

# Session factory – we will use this everywhere
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session() -> Iterator[Session]:
    # closing the session also releases any row lock taken during settlement
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
