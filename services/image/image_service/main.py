import os

from fastapi import FastAPI
from pydantic import BaseModel

from image_service.serve.router import router as serve_router
from image_service.upload.router import router as upload_router
from shared.middleware import register_error_handlers, request_id_middleware
from shared.utils.logger import configure_logging


# ── OpenAPI metadata ──────────────────────────────────────────────────────────

_DESCRIPTION = """
## Image upload & serve functions

The same routes the Lambda functions answer behind API Gateway, served as a
single app for local running.

* **Upload** — presigned S3 PUT URLs, synchronous finalize into the public bucket, delete.
* **Serve** — on-demand `crop/<w>x<h>/<key>` and `ratio/<w>x<h>/<key>` variants,
  answered with a redirect to the stored object.

### Error shape
```json
{ "error": "Human-readable message" }
```
"""


# ── Health schema ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    service: str


# ── App factory ───────────────────────────────────────────────────────────────

def create_app() -> FastAPI:
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    app = FastAPI(
        title="Image Upload & Serve",
        version="1.0.0",
        description=_DESCRIPTION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.middleware("http")(request_id_middleware)
    register_error_handlers(app)

    app.include_router(upload_router)
    app.include_router(serve_router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        return HealthResponse(status="ok", service="image")

    return app


app = create_app()
