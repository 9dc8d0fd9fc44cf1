"""taskvault: servicio de listas de tareas con ownership estricto por usuario."""

__version__ = "0.1.0"
