import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response, status

from config import BotConfig, load_config
from coingecko import CoinGeckoClient
from handlers import BotHandlers
from models import MalformedUpdateError, parse_update
from router import UpdateRouter
from telegram_api import TelegramAPIError, TelegramClient

log = logging.getLogger(__name__)

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def create_app(
    config: Optional[BotConfig] = None,
    *,
    telegram: Optional[TelegramClient] = None,
    prices: Optional[CoinGeckoClient] = None,
) -> FastAPI:
    config = config or load_config()
    telegram = telegram or TelegramClient(config)
    prices = prices or CoinGeckoClient(config)
    handlers = BotHandlers(config, telegram, prices)
    router = UpdateRouter(config, handlers, telegram)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if config.bot_token and config.webhook_url:
            await telegram.set_webhook(config.webhook_url, config.webhook_secret)
        else:
            log.info("WEBHOOK_BASE не задан, setWebhook пропускаю")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.config = config
    app.state.router = router

    @app.get("/", include_in_schema=False)
    @app.head("/", include_in_schema=False)
    async def healthcheck() -> Response:
        return Response(status_code=status.HTTP_200_OK, content="ok")

    @app.post("/webhook", include_in_schema=False)
    async def telegram_webhook(request: Request) -> Response:
        if config.webhook_secret and request.headers.get(SECRET_HEADER) != config.webhook_secret:
            return Response(status_code=status.HTTP_403_FORBIDDEN)

        try:
            payload = await request.json()
        except ValueError:
            return Response(status_code=status.HTTP_200_OK)

        try:
            update = parse_update(payload)
        except MalformedUpdateError as e:
            log.warning("Пропускаю битый апдейт: %s", e)
            return Response(status_code=status.HTTP_200_OK)
        if update is None:
            return Response(status_code=status.HTTP_200_OK)

        # 200 в любом случае, иначе Telegram будет слать апдейт повторно
        try:
            await router.handle_update(update)
        except (TelegramAPIError, httpx.HTTPError) as e:
            log.error("Ответ не доставлен: %s", e)
        return Response(status_code=status.HTTP_200_OK)

    return app
