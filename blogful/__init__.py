"""Article CRUD service and parameterized PostgreSQL queries on psycopg3."""

__version__ = "0.1.0"
