"""Routers por feature (auth / tasks)."""
