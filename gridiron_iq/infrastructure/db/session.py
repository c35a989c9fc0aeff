from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gridiron_iq.infrastructure.settings import DATABASE_URL
from gridiron_iq.infrastructure.db.base import Base

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # Sessions are used from FastAPI's worker threads
    connect_args["check_same_thread"] = False

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

__all__ = ["Base", "engine", "SessionLocal"]
