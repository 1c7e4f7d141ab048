# storefront/repos/dialect.py
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def upsert_insert(db: Session, model):
    """INSERT supporting ON CONFLICT for the bound dialect (postgres in prod, sqlite in tests)."""
    if db.get_bind().dialect.name == "postgresql":
        return postgresql.insert(model)
    return sqlite.insert(model)
