# database.py
"""Database configuration and session management."""

import logging
from sqlalchemy import create_engine, NullPool
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

logger.info("Connecting to database...")

# SQLite needs a shared connection across threads; serverless Postgres
# deployments must not keep pooled connections between invocations.
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(DATABASE_URL, poolclass=NullPool)

# Create a configured "SessionLocal" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()
