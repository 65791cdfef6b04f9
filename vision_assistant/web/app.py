from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path

from vision_assistant.services.api import create_api

root = Path(__file__).resolve().parent


def create_app(**kwargs) -> FastAPI:
    # UI routes go on the API app itself so its lifespan (welcome line,
    # camera release) runs; a mounted sub-app's lifespan would not.
    app = create_api(**kwargs)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index():
        return (root / "templates" / "index.html").read_text(encoding="utf-8")

    app.mount("/static", StaticFiles(directory=str(root / "static")), name="static")
    return app

