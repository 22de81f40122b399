"""Promptkeeper API Server"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import folders, health, prompts


def create_app() -> FastAPI:
    app = FastAPI(
        title="Promptkeeper",
        description="Store reusable prompts and organize them into folders",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # User-scoped routes
    app.include_router(folders.router)
    app.include_router(prompts.router)

    # System routes
    app.include_router(health.router)

    return app


app = create_app()
