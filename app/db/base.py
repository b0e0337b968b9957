from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow():
    # Python-side default keeps sub-second precision for newest-first ordering
    return datetime.now(timezone.utc)
