"""
BLOCK_COMPOSER — FastAPI app
Démarrer : uvicorn block_composer.main:app --reload --port 8001
"""
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import config
from .router import router as blocks_router

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="BLOCK_COMPOSER — Éditeur de blocs", version="0.1.0", docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(blocks_router)


@app.on_event("startup")
def startup():
    from .database import init_db
    init_db()
    log.info("DB initialisée (SQLite)")

    # Fichiers déposés par LocalUploader
    uploads = Path(config.UPLOADS_DIR)
    try:
        uploads.mkdir(parents=True, exist_ok=True)
        app.mount("/dist/uploads", StaticFiles(directory=str(uploads)), name="uploads")
        log.info("Static uploads monté sur %s", uploads)
    except OSError as e:
        log.warning("Impossible de monter /dist/uploads : %s", e)


@app.get("/health")
def health():
    return {"status": "ok", "service": "block_composer", "version": "0.1.0"}
