from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dripflow.config import settings
from dripflow.routers import blocks, catalog, customers, editor, steps
from dripflow.util.ids import new_id

logger = logging.getLogger("dripflow")


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

app = FastAPI(title="Drip Sequence Flow Editor API", version="0.1.0", openapi_url="/openapi.json")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(blocks.router, prefix="/api/v0", tags=["blocks"])
app.include_router(steps.router, prefix="/api/v0", tags=["steps"])
app.include_router(customers.router, prefix="/api/v0", tags=["customers"])
app.include_router(editor.router, prefix="/api/v0", tags=["editor"])
app.include_router(catalog.router, prefix="/api/v0", tags=["catalog"])


@app.get("/api/v0/healthz")
def healthz():
    return {"status": "ok", "env": settings.app_env}


@app.middleware("http")
async def add_request_id_header(request: Request, call_next):
    resp: Response = await call_next(request)
    resp.headers.setdefault("X-Request-Id", request.headers.get("X-Request-Id") or new_id("req_"))
    return resp


@app.exception_handler(Exception)
async def default_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL",
                "message": "Unhandled error",
                "details": [{"path": request.url.path, "msg": str(exc)}],
            }
        },
    )
