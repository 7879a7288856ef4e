from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from typing import Dict
from ..core.config import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def check_database_status(db) -> Dict:
    db.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "connected"}
