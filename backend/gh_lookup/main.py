import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Body, Cookie, Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from loguru import logger
from pydantic import ValidationError

from .config import get_settings
from .datasources.github_adapter import GitHubAdapter
from .schemas import FieldUpdate, LookupState, Query
from .services.controller import LookupController
from .services.render import render_page
from .services.sessions import SessionRegistry

SESSION_COOKIE = "gh_lookup_session"

settings = get_settings()

logger.remove()
logger.add(sys.stderr, level=settings.log_level.upper())

github = GitHubAdapter(settings)
sessions = SessionRegistry(lambda: LookupController(github), max_sessions=settings.max_sessions)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await github.aclose()


app = FastAPI(title="GitHub Lookup", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_controller(
    response: Response,
    session_id: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
) -> LookupController:
    session_id, controller = sessions.get(session_id)
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return controller


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@app.get("/", response_class=HTMLResponse)
async def index(lookup: LookupController = Depends(get_controller)):
    return render_page(lookup.snapshot())


@app.get("/api/state", response_model=LookupState)
async def read_state(lookup: LookupController = Depends(get_controller)):
    return lookup.snapshot()


@app.post("/api/field", response_model=LookupState)
async def update_field(body: FieldUpdate, lookup: LookupController = Depends(get_controller)):
    try:
        lookup.update_field(body.field, body.value)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid {body.field}: {body.value!r}") from exc
    return lookup.snapshot()


@app.post("/api/submit", response_model=LookupState)
async def submit(
    query: Optional[Query] = Body(default=None),
    wait: bool = False,
    lookup: LookupController = Depends(get_controller),
):
    """Start a lookup for ``query``, or for the stored query when no body is sent."""
    if wait:
        return await lookup.submit(query)
    # the response reflects the state right after the request was issued
    lookup.submit_nowait(query)
    return lookup.snapshot()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8020)
