import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from routes.sessions import router as sessions_router
from services.config import get_allowed_origins, get_max_sessions
from services.store import SessionStore

# Load .env from backend dir
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))
logger = logging.getLogger(__name__)


def create_app(store: SessionStore | None = None) -> FastAPI:
    """Build the API around one SessionStore (a fresh one from config if not given)."""
    if store is None:
        store = SessionStore(get_max_sessions())
    app = FastAPI(title="Scrum Poker API", version="0.1.0")
    app.state.store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def index() -> str:
        return "Hello, world!"

    @app.get("/health")
    def health(request: Request) -> dict[str, str | int]:
        current: SessionStore = request.app.state.store
        return {"status": "ok", "sessions": len(current), "max_sessions": current.max_sessions}

    app.include_router(sessions_router)
    logger.info("[main] Scrum Poker API ready (max_sessions=%d)", store.max_sessions)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
