from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata

# BIGINT identity on PostgreSQL, INTEGER on SQLite so rowid autoincrement applies
BigIntId = BigInteger().with_variant(Integer(), "sqlite")
