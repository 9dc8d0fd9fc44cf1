"""Adapters de entrada (HTTP)."""
