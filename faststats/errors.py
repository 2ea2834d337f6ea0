"""Errors raised by the statistics service, each tied to an HTTP status."""

from __future__ import annotations

from http import HTTPStatus


class StatsError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return int(self.status)

    def to_dict(self) -> dict[str, str]:
        """Response body for this error."""
        return {"error": str(self)}


class InvalidRequest(StatsError):
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid request: {detail}")


class SymbolNotFound(StatsError):
    status = HTTPStatus.NOT_FOUND

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Symbol not found: {symbol}")


class TooManyValues(StatsError):
    status = HTTPStatus.BAD_REQUEST

    def __init__(self) -> None:
        super().__init__("Too many values in batch (max is 10,000)")


class InternalError(StatsError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"Internal error: {cause}")