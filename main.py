import logging

import uvicorn

from app import create_app
from config import load_config
from logging_setup import setup_logging

log = logging.getLogger("app")


# ---------- ТОЧКА ВХОДА ----------

def main() -> None:
    setup_logging()
    config = load_config()
    if not config.bot_token:
        log.error("TELEGRAM_BOT_TOKEN не задан. Проверь .env")
        raise SystemExit("TELEGRAM_BOT_TOKEN не задан")

    log.info("Запуск webhook-сервера на %s:%s", config.host, config.port)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
