"""Dominio: entidades, partial update tipado y puertos de persistencia."""
