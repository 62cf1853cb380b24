# marketplace/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from marketplace.domain.errors import InvalidInput, InvalidQuantity, MarketplaceError, MissingField


def _validation_error(exc: RequestValidationError) -> InvalidInput:
    errors = exc.errors()
    fields = [str(e["loc"][-1]) for e in errors if e.get("loc")]

    if "quantity" in fields:
        return InvalidQuantity("Quantity must be a positive integer")

    missing = [str(e["loc"][-1]) for e in errors if e.get("type") == "missing" and e.get("loc")]
    if missing:
        return MissingField(f"Missing required fields: {', '.join(missing)}")

    return InvalidInput(f"Invalid value for: {', '.join(fields) or 'request body'}")


def error_response(exc: MarketplaceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(_validation_error(exc))
