import logging

import databases

from clerk_sync.config import Settings

from .app import build_app

# Run with `uvicorn clerk_sync.web.main:app`.
settings = Settings.from_env()
logging.basicConfig(level=settings.log_level)

database = databases.Database(settings.database_url)
app = build_app(database, settings)
