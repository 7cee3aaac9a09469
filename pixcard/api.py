"""FastAPI application for pixcard."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import settings
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware, route_path
from .monitoring import metrics_payload, record_service_error
from .pix_encoder import PixPayloadInput
from .schemas import (
    PixChargeRequest,
    PixChargeResponse,
    PixPayloadRequest,
    PixPayloadResponse,
    VerifyRequest,
    VerifyResponse,
)
from .services.errors import ServiceError
from .services.generator import PayloadGenerator, PixChargeGenerator, ProfilePix
from .services.verify import PayloadVerifier

logger = logging.getLogger("pixcard.api")


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning(
            "api key is using the default value",
            extra={"config_key": "api_key"},
        )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    _warn_insecure_defaults()
    logger.info("application started", extra={"environment": settings.environment})
    yield


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CORSMiddleware, allow_origins=settings.allowed_origins, allow_methods=["*"], allow_headers=["*"])


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


def get_payload_generator() -> PayloadGenerator:
    return PayloadGenerator(settings)


def get_charge_generator() -> PixChargeGenerator:
    return PixChargeGenerator(settings)


def get_verifier() -> PayloadVerifier:
    return PayloadVerifier(settings)


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
    logger.exception(
        "unhandled exception",
        extra={"path": route_path(request), "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/pix/payload", response_model=PixPayloadResponse, tags=["pix"], dependencies=[Depends(require_api_key)])
def generate_payload(
    payload: PixPayloadRequest,
    generator: PayloadGenerator = Depends(get_payload_generator),
) -> PixPayloadResponse:
    encoded = generator.generate(
        PixPayloadInput(
            payment_key=payload.payment_key,
            merchant_name=payload.merchant_name,
            merchant_city=payload.merchant_city,
            amount=payload.amount,
            transaction_id=payload.transaction_id,
        )
    )
    return PixPayloadResponse(
        payload=encoded.payload,
        crc=encoded.crc,
        qr_png_base64=generator.render(encoded) if payload.render_qr else None,
    )


@app.post("/v1/pix/charges", response_model=PixChargeResponse, tags=["pix"], dependencies=[Depends(require_api_key)])
def create_charge(
    payload: PixChargeRequest,
    generator: PixChargeGenerator = Depends(get_charge_generator),
) -> PixChargeResponse:
    profile = ProfilePix(
        pix_key=payload.pix_key,
        full_name=payload.full_name,
        pix_beneficiary_name=payload.pix_beneficiary_name,
        pix_beneficiary_city=payload.pix_beneficiary_city,
    )
    result = generator.create_charge(profile, payload.amount)
    return PixChargeResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        qr_png_base64=result.qr_png_base64,
        transaction_id=result.transaction_id,
        beneficiary_name=result.beneficiary_name,
        beneficiary_city=result.beneficiary_city,
        display_amount=result.display_amount,
    )


@app.post("/v1/pix/verify", response_model=VerifyResponse, tags=["pix"], dependencies=[Depends(require_api_key)])
def verify_payload(payload: VerifyRequest, verifier: PayloadVerifier = Depends(get_verifier)) -> VerifyResponse:
    decoded = verifier.verify(payload.payload)
    return VerifyResponse(
        valid=True,
        crc=decoded.crc,
        payment_key=decoded.payment_key,
        merchant_name=decoded.merchant_name,
        merchant_city=decoded.merchant_city,
        amount=decoded.amount,
        transaction_id=decoded.transaction_id,
    )
