"""Database engine, sessions and schema setup."""
