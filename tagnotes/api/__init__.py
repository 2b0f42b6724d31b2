from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tagnotes.api.endpoints import get_endpoints_router
from tagnotes.config import settings
from tagnotes.notes_app import NotesApp


def create_app(*, notes_app: NotesApp) -> FastAPI:
    """Create FastAPI app.

    Raises:
        ValueError: AUTH_USERNAME or AUTH_PASSWORD is not set
    """
    if not settings.api_auth_configured:
        raise ValueError("AUTH_USERNAME and AUTH_PASSWORD must be set to serve the notes API")

    app = FastAPI(title="tagnotes")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router=get_endpoints_router(notes_app=notes_app))

    return app
