"""
Column types shared by the models. JSON maps to JSONB on PostgreSQL.
"""
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

JSONType = JSON().with_variant(JSONB(), "postgresql")
