"""Infrastructure layer: database engine, schema, repositories, store.

This layer depends on stdlib and third-party libs (SQLAlchemy, Alembic).
It must never import from services, commands, or output.
"""
