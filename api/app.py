from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from api.routes import analyze as analyze_routes
from squatdepth import __version__
from squatdepth.utils.logger import configure_logging


def create_app() -> FastAPI:
    configure_logging(logging.INFO)
    app = FastAPI(
        title="Squat Depth API",
        description="REST API judging squat depth from per-frame pose landmarks.",
        version=__version__,
    )
    app.include_router(analyze_routes.router)

    @app.get("/", include_in_schema=False)
    async def redirect_to_docs() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    return app


app = create_app()
