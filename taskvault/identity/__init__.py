"""Identidad: credenciales, tokens y Access Guard."""
