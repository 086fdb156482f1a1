"""
Watch Party API
FastAPI app for synchronized video rooms.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.v1.routers import api_router
from backend.party_service import PartyService
from watchparty.config import PartyConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("watchparty")


def create_app(config: Optional[PartyConfig] = None) -> FastAPI:
    config = config or PartyConfig.from_env()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    app = FastAPI(
        title="Watch Party API",
        description="Shared playback, queue and chat for named rooms.",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.party = PartyService(config=config)
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", tags=["Root"])
    async def read_root():
        return {"message": "Watch party server is running."}

    return app


app = create_app()


def main() -> None:
    config = app.state.party.config
    logger.info("Starting server on %s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
