from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, List, Optional

from fastapi import BackgroundTasks, FastAPI, HTTPException, Response
from fastapi.responses import PlainTextResponse

from selene.core.exceptions import HeliusError
from selene.helius.enhanced_schemas import EnhancedTransaction
from selene.relay.bot import SeleneBot

logger = logging.getLogger(__name__)

Hook = Callable[[], Awaitable[None]]


def create_app(
    bot: SeleneBot,
    on_startup: Optional[Hook] = None,
    on_shutdown: Optional[Hook] = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if on_startup is not None:
            await on_startup()
        try:
            yield
        finally:
            if on_shutdown is not None:
                await on_shutdown()

    app = FastAPI(title="selene", docs_url=None, redoc_url=None, openapi_url=None, lifespan=lifespan)
    app.state.bot = bot

    @app.post("/", status_code=202)
    async def helius_hook(transactions: List[EnhancedTransaction], background: BackgroundTasks) -> Response:
        bot.metrics.transactions_received.inc(len(transactions))
        background.add_task(bot.handle_hook, transactions)
        return Response(status_code=202)

    @app.get("/health")
    async def health() -> dict:
        try:
            height = await bot.health()
        except HeliusError as exc:
            logger.error("health check failed: %s", exc)
            raise HTTPException(status_code=503, detail="unhealthy") from exc
        return {"height": height}

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=bot.metrics.exposition(), media_type=bot.metrics.content_type)

    @app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def go_away(path: str) -> PlainTextResponse:
        return PlainTextResponse("go away", status_code=403)

    return app


__all__ = ["create_app"]
