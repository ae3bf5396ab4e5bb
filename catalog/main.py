# catalog/main.py
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import Settings, get_settings
from .database import ProductStore, seed_products
from .errors import ServiceError, ValidationError
from .logger import configure_logging, get_logger
from .service import get_product_logic, list_by_category_logic, list_products_logic

logger = get_logger("api")


# ---------------------------
# Envelope helpers
# ---------------------------
def success_response(data: Any) -> dict:
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True, mode="json")
    return {"success": True, "data": data}


def error_response(error: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.to_dict()},
    )


# ---------------------------
# App factory
# ---------------------------
def create_app(store: Optional[ProductStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = ProductStore(max_records=settings.max_records)
        if settings.seed_data:
            seed_products(store, new_product_days=settings.new_product_days)

    app = FastAPI(title="api-catalog (in-memory product catalog)")
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Error handlers
    # ---------------------------
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if isinstance(exc, ValidationError):
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.details)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]
        return error_response(ValidationError("Invalid request", details=details))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s: %s\n%s",
                     request.method, request.url.path, exc, traceback.format_exc())
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
        )

    # ---------------------------
    # Health
    # ---------------------------
    @app.get("/")
    async def health_check():
        return success_response({"status": "ok", "service": "api-catalog", "products": store.count()})

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/product")
    async def list_products(request: Request):
        result = list_products_logic(
            store, request.query_params, new_product_days=settings.new_product_days
        )
        return success_response(result)

    @app.get("/product/category/{category}")
    async def list_products_by_category(category: str, request: Request):
        query = {k: v for k, v in request.query_params.items() if k != "category"}
        result = list_by_category_logic(
            store, {"category": category}, query, new_product_days=settings.new_product_days
        )
        return success_response(result)

    @app.get("/product/{product_id}")
    async def get_product(product_id: str):
        product = get_product_logic(
            store, {"id": product_id}, new_product_days=settings.new_product_days
        )
        return success_response(product)

    logger.info("Catalog API ready with %d products", store.count())
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("catalog.main:app", host=_settings.host, port=_settings.port)
