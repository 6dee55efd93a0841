# routes.py
from fastapi import FastAPI
from controller.progress_controller import progress_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(progress_router)
