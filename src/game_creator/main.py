import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .api.routes import router
from .config import MAX_OUTPUT_TOKENS, MODEL, PORT, ROOT_PATH, STATIC_DIR
from .generation.client import GenerationClient
from .session.pipeline import GamePipeline
from .session.registry import SessionRegistry

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Initializing generation client (model=%s, max_tokens=%d)...", MODEL, MAX_OUTPUT_TOKENS)
    generation_client = GenerationClient()

    app.state.pipeline = GamePipeline(generation_client)
    app.state.registry = SessionRegistry()

    logger.info("Startup complete, ready to serve")
    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.pipeline.drain()
    await generation_client.close()


app = FastAPI(title="AI Game Creator", root_path=ROOT_PATH, lifespan=lifespan)
app.include_router(router)
app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")


def run() -> None:
    uvicorn.run("game_creator.main:app", host="0.0.0.0", port=PORT)
