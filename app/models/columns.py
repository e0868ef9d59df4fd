from sqlalchemy.dialects.postgresql import JSONB

from app.extensions import db

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONDocument = db.JSON().with_variant(JSONB(), "postgresql")


def values(enum_cls):
    return [member.value for member in enum_cls]


def check_in(column, enum_cls):
    allowed = ",".join(f"'{value}'" for value in values(enum_cls))
    return db.CheckConstraint(f"{column} IN ({allowed})")
