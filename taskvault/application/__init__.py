"""Capa application: casos de uso que orquestan dominio + puertos."""
