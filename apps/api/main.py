from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.bot import get_engine, router as bot_router

logging.basicConfig(level=os.environ.get("JAFFRE_LOG_LEVEL", "INFO").upper())

app = FastAPI(title="Jaffre Bot API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bot_router)


@app.get("/api/health")
def health() -> dict[str, Any]:
    engine = get_engine()
    return {
        "ok": True,
        "difficulty": engine.difficulty.value,
        "activeGames": len(engine.active_games()),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.environ.get("JAFFRE_HOST", "127.0.0.1"), port=int(os.environ.get("JAFFRE_PORT", "8000")))
