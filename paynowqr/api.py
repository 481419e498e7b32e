"""FastAPI application for paynowqr."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from .config import settings
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware, route_path
from .monitoring import metrics_payload, record_service_error
from .schemas import ErrorResponse, PayloadResponse, PayNowRequest, QRResponse
from .services.errors import ServiceError
from .services.generator import PayNowQRGenerator

app = FastAPI(title="paynowqr", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("paynowqr.api")

_ERROR_RESPONSES = {422: {"model": ErrorResponse}}


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning(
            "api key is using its default value",
            extra={"config_key": "api_key"},
        )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


def get_generator() -> PayNowQRGenerator:
    return PayNowQRGenerator()


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    path = route_path(request)
    logger.warning(
        "service error",
        extra={"code": exc.code, "path": path, "method": request.method},
    )
    record_service_error(exc.code, path)
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    path = route_path(request)
    logger.exception(
        "unhandled exception",
        extra={"path": path, "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post(
    "/v1/paynow/payload",
    response_model=PayloadResponse,
    responses=_ERROR_RESPONSES,
    tags=["paynow"],
    dependencies=[Depends(require_api_key)],
)
def generate_payload(payload: PayNowRequest, generator: PayNowQRGenerator = Depends(get_generator)) -> PayloadResponse:
    result = generator.generate(payload.to_intent(settings.merchant_name), render=False)
    return PayloadResponse(payload=result.encoded.payload, crc=result.encoded.crc, proxy_type=result.proxy_type.name)


@app.post(
    "/v1/paynow/qr",
    response_model=QRResponse,
    responses=_ERROR_RESPONSES,
    tags=["paynow"],
    dependencies=[Depends(require_api_key)],
)
def generate_qr(payload: PayNowRequest, generator: PayNowQRGenerator = Depends(get_generator)) -> QRResponse:
    result = generator.generate(payload.to_intent(settings.merchant_name))
    return QRResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        proxy_type=result.proxy_type.name,
        qr_png_base64=result.qr_png_base64,
        qr_svg=result.qr_svg,
    )
