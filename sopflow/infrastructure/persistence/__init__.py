"""SQL persistence (PostgreSQL via SQLAlchemy async); used when database_backend is 'postgres'."""
