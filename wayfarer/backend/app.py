"""FastAPI entry point exposing play sessions as JSON."""

from __future__ import annotations

import logging
import uuid
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import GameConfig
from .errors import ScriptError
from .loaders import load_all_settings
from .runtime import GameRuntime, create_game
from .script_source import ScriptSource
from .systems import BufferedSink

logger = logging.getLogger(__name__)

allowed_origins = [
    "http://127.0.0.1:5173",
    "http://localhost:5173",
    "http://0.0.0.0:5173",
]


class ChooseRequest(BaseModel):
    index: int


class Session:
    """One play session: its own runtime and buffered output."""

    def __init__(self, runtime: GameRuntime, sink: BufferedSink):
        self.runtime = runtime
        self.sink = sink

    def snapshot(self, session_id: str, since: int = 0) -> Dict[str, object]:
        return {"session_id": session_id, **self.sink.snapshot(since)}


def create_app(source: Optional[ScriptSource] = None, config: Optional[GameConfig] = None) -> FastAPI:
    """Build the API; the bundled script is loaded when ``source`` is omitted."""
    if source is None:
        source, loaded_config = load_all_settings()
        config = config or loaded_config
    config = config or GameConfig()
    # 启动前校验入口
    source.check_entry()

    app = FastAPI(title="Wayfarer")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    sessions: Dict[str, Session] = {}
    app.state.sessions = sessions

    @app.exception_handler(ScriptError)
    async def script_error_handler(request: Request, exc: ScriptError) -> JSONResponse:
        logger.error("script error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": type(exc).__name__, "detail": str(exc)})

    def get_session(session_id: str) -> Session:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"unknown session {session_id}")
        return session

    @app.post("/api/sessions")
    async def create_session() -> Dict[str, object]:
        sink = BufferedSink()
        runtime = create_game(source, config=config, sink=sink)
        runtime.start()
        session_id = uuid.uuid4().hex
        sessions[session_id] = Session(runtime, sink)
        logger.info("session %s created", session_id)
        return sessions[session_id].snapshot(session_id)

    @app.get("/api/sessions/{session_id}")
    async def get_state(session_id: str, since: int = 0) -> Dict[str, object]:
        return get_session(session_id).snapshot(session_id, since)

    @app.post("/api/sessions/{session_id}/choose")
    async def choose(session_id: str, request: ChooseRequest) -> Dict[str, object]:
        session = get_session(session_id)
        if not 0 <= request.index < len(session.runtime.options):
            raise HTTPException(status_code=400, detail=f"no option {request.index}")
        cursor = len(session.sink.log)
        session.runtime.choose(request.index)
        return session.snapshot(session_id, cursor)

    @app.delete("/api/sessions/{session_id}")
    async def end_session(session_id: str) -> Dict[str, object]:
        get_session(session_id)
        del sessions[session_id]
        logger.info("session %s ended", session_id)
        return {"session_id": session_id, "ended": True}

    return app
