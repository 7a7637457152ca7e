"""
Database Connection and Metadata
Uses the databases async driver; SQLAlchemy metadata backs migrations
"""

from databases import Database
from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base
from careernest.config import settings

# Database URL
DATABASE_URL = settings.DATABASE_URL

# Pool sizing only applies to server databases
if DATABASE_URL.startswith(("postgresql://", "postgres://")):
    db_options = {"min_size": 1, "max_size": 10}
else:
    db_options = {}

# Create database instance for async queries
database = Database(DATABASE_URL, **db_options)

# Metadata for models
metadata = MetaData()

# Base class for models
Base = declarative_base(metadata=metadata)

