from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .models import (
    CompareInput,
    CompareOnKeysRequest,
    CompareOutput,
    HealthResponse,
    SplitInput,
    SplitOnKeysRequest,
    SplitOutput,
)
from .compare import compare
from .composite import compare_on_keys, split_on_keys
from .errors import KeyColumnNotFound, MalformedInput
from .settings import load_settings, setup_logging
from .split import split


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(load_settings())
    yield


app = FastAPI(
    title="tablerecon",
    description="Key-based reconciliation and splitting of tabular data",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def malformed_request(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "kind": MalformedInput.kind,
                "message": f"Cannot decode request body: {len(exc.errors())} error(s)",
                "errors": jsonable_encoder(exc.errors()),
            }
        },
    )


def _key_not_found(exc: KeyColumnNotFound) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"kind": exc.kind, "column": exc.column, "side": exc.side, "message": str(exc)},
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/compare", response_model=CompareOutput)
def compare_tables(request: CompareInput):
    try:
        return compare(request)
    except KeyColumnNotFound as exc:
        raise _key_not_found(exc)


@app.post("/split", response_model=SplitOutput)
def split_table(request: SplitInput):
    try:
        return split(request)
    except KeyColumnNotFound as exc:
        raise _key_not_found(exc)


@app.post("/compare/keys", response_model=CompareOutput)
def compare_tables_on_keys(request: CompareOnKeysRequest):
    try:
        return compare_on_keys(
            request.left, request.right, request.keys, request.options, request.sort_by_keys
        )
    except KeyColumnNotFound as exc:
        raise _key_not_found(exc)


@app.post("/split/keys", response_model=SplitOutput)
def split_table_on_keys(request: SplitOnKeysRequest):
    try:
        return split_on_keys(request.table, request.keys)
    except KeyColumnNotFound as exc:
        raise _key_not_found(exc)
