"""
Database package for Green's Green Retreat.

This package provides modular database operations:
- connection: Database connection management (get_db, close_db, init_db, connect)
- schema: Table creation and indexes
- seed: Initial seed data (cottages, admin user)
"""

from database.connection import get_db, close_db, init_db, connect
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database, seed_cottages

__all__ = [
    # Connection
    'get_db',
    'close_db',
    'init_db',
    'connect',
    # Schema
    'drop_tables',
    'create_tables',
    'create_indexes',
    # Seed
    'seed_database',
    'seed_cottages',
]
