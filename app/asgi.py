"""ASGI entrypoint: ``uvicorn app.asgi:app``.

Building the app resolves the database connection; a malformed DATABASE_URL
stops the process here.
"""

from __future__ import annotations

from dotenv import load_dotenv

from .main import create_app

load_dotenv()  # .env for local development

app = create_app()
