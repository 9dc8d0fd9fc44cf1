"""
Name: Backend ASGI Entrypoint (taskvault.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path used by uvicorn stable: `uvicorn taskvault.main:app`

Notes/Constraints:
  - No configuration or IO should live here
"""

from taskvault.api.main import app

__all__ = ["app"]
