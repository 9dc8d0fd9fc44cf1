"""Interfaz HTTP (FastAPI)."""
