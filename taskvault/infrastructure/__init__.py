"""Infraestructura: pool de conexiones y repositorios (Postgres / in-memory)."""
