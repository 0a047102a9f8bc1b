# lms_api/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from lms_api.core.config import settings

# sqlite needs this to be shared across the threadpool FastAPI runs sync handlers in
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
