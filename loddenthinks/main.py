import logging

from fastapi import FastAPI

from loddenthinks.api.routes import router
from loddenthinks.settings import settings_from_env

app = FastAPI(title="loddenthinks", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=getattr(logging, settings_from_env().log_level, logging.INFO))
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "loddenthinks", "version": "0.1.0"}
