from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import load_config, notes_root
from .errors import NotesError
from .routers import notes

import os
import logging

# ------------------------------------------------------------
# 設定
# ------------------------------------------------------------

swagger_enabled = os.getenv("SWAGGER_API_DOCS", "false").lower() in ["true", "1", "yes"]

config = load_config()

logging.basicConfig(
    level=config["logging"]["level"],
    format=":: %(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger("notesdir")

# ------------------------------------------------------------
# FastAPI
# ------------------------------------------------------------

base_path = os.getenv("BASE_PATH", "/").rstrip("/")

app = FastAPI(
    title="notesdir API",
    docs_url=None if not swagger_enabled else "/docs",
    redoc_url=None if not swagger_enabled else "/redoc",
    swagger_ui_parameters={
        "url": f"{base_path}/openapi.json",
    },
    servers=[
        {"url": base_path},
    ],
)

# ------------------------------------------------------------
# Middleware
# ------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=config["cors"].get("allow_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------
# Errors
# ------------------------------------------------------------

@app.exception_handler(NotesError)
async def notes_error_handler(request: Request, exc: NotesError):
    # 種類に関わらず同じ形のエラーを返す
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )

# ------------------------------------------------------------
# Routers
# ------------------------------------------------------------

app.include_router(notes.router)

# ------------------------------------------------------------
# Startup
# ------------------------------------------------------------

@app.on_event("startup")
def startup():

    # ノートの保存ディレクトリ
    root = notes_root(config)
    os.makedirs(root, exist_ok=True)
    logger.info(f"📂 Notes storage initialized: {root}")

# ------------------------------------------------------------
# Health Check
# ------------------------------------------------------------

@app.head("/ping")
async def ping_head():
    return Response(status_code=200)

# ------------------------------------------------------------
# 起動
# ------------------------------------------------------------

def run():
    import uvicorn

    uvicorn.run(
        "notesdir.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        root_path=base_path,
        log_level=config["logging"]["level"].lower(),
    )


if __name__ == "__main__":
    run()
