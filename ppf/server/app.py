"""HTTP API for the price feed oracle."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..address import to_address
from ..auth import PROTOCOL_VERSION
from ..errors import (
    BadSignature,
    OracleError,
    StaleOrFutureTimestamp,
    Unauthorized,
)
from ..services import PriceFeedOracle

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[OracleError], int] = {
    Unauthorized: 403,
    BadSignature: 401,
    StaleOrFutureTimestamp: 409,
}


class UpdateBody(BaseModel):
    base: str
    quote: str
    rate: int = Field(ge=0)
    timestamp: int = Field(ge=0)
    signature: str


class BatchBody(BaseModel):
    updates: list[UpdateBody]


def _decode_signature(value: str) -> bytes:
    raw = value[2:] if value.startswith("0x") else value
    return bytes.fromhex(raw)


def _rate_payload(base: str, quote: str, rate: int, timestamp: int) -> dict:
    # u128 rates overflow JSON-safe integers, so they travel as strings.
    return {
        "base": to_address(base),
        "quote": to_address(quote),
        "rate": str(rate),
        "timestamp": timestamp,
    }


def create_app(oracle: PriceFeedOracle) -> FastAPI:
    """Build the FastAPI application serving ``oracle``."""
    app = FastAPI(
        title="PPF Oracle",
        description="Operator-signed price feed — latest rate per asset pair",
    )

    @app.exception_handler(OracleError)
    async def _oracle_error(request: Request, exc: OracleError) -> JSONResponse:
        status = _STATUS_BY_ERROR.get(type(exc), 400)
        return JSONResponse(
            status_code=status,
            content={"error": type(exc).__name__, "code": exc.code, "detail": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def _value_error(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "InvalidInput", "code": "PPF_INVALID_INPUT", "detail": str(exc)},
        )

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "version": PROTOCOL_VERSION,
            "operator": oracle.operator,
            "pairs": oracle.pair_count,
        }

    @app.get("/operator")
    def operator() -> dict:
        return {
            "operator": oracle.operator,
            "operator_owner": oracle.operator_owner,
        }

    @app.get("/rates/{base}/{quote}")
    def get_rate(base: str, quote: str) -> dict:
        rate, timestamp = oracle.get(base, quote)
        return _rate_payload(base, quote, rate, timestamp)

    @app.post("/rates")
    def post_rate(body: UpdateBody) -> dict:
        oracle.update(
            body.base,
            body.quote,
            body.rate,
            body.timestamp,
            _decode_signature(body.signature),
        )
        return _rate_payload(body.base, body.quote, body.rate, body.timestamp)

    @app.post("/rates/batch")
    def post_batch(body: BatchBody) -> dict:
        updates = body.updates
        oracle.update_many(
            [u.base for u in updates],
            [u.quote for u in updates],
            [u.rate for u in updates],
            [u.timestamp for u in updates],
            b"".join(_decode_signature(u.signature) for u in updates),
        )
        logger.info("Accepted batch of %d updates", len(updates))
        return {"accepted": len(updates)}

    return app
