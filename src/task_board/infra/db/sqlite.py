from __future__ import annotations
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from pathlib import Path

def make_sqlite_url(db_path: str) -> str:
    # db_path like "./data/tasks.db"
    p = Path(db_path).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{p.as_posix()}"

def make_engine(sqlite_url: str) -> Engine:
    return create_engine(sqlite_url)

def make_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(engine, expire_on_commit=False)
