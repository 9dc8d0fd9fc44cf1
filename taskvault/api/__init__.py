"""Aplicación FastAPI (wiring HTTP: app, middleware, handlers)."""
