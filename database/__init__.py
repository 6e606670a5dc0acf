"""
database: ORM models, sessions and the todo store.
"""
