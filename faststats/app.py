"""HTTP service accepting batches of values per symbol and serving window statistics."""

from __future__ import annotations

import argparse
import logging
import threading
from numbers import Real
from typing import Iterable, Optional, Sequence

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from faststats.aggregator import DEFAULT_LEVELS, DEFAULT_RADIX, StatsResult, SymbolAggregator
from faststats.errors import InvalidRequest, StatsError, SymbolNotFound, TooManyValues

log = logging.getLogger(__name__)

MAX_BATCH = 10_000
MAX_K = 2**32 - 1
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


class SymbolRegistry:
    """Thread-safe mapping from symbol to its aggregator."""

    def __init__(self, levels: int = DEFAULT_LEVELS, radix: int = DEFAULT_RADIX) -> None:
        self.levels = levels
        self.radix = radix
        self._lock = threading.Lock()
        self._symbols: dict[str, tuple[threading.Lock, SymbolAggregator]] = {}

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def add_batch(self, symbol: str, values: Sequence[float]) -> None:
        """Append values to a symbol, creating it on first use."""
        if len(values) > MAX_BATCH:
            raise TooManyValues()
        if not symbol.strip():
            raise InvalidRequest("Symbol is empty")

        log.info("POST /add_batch/ - symbol: %s, values: %d", symbol, len(values))
        with self._lock:
            entry = self._symbols.get(symbol)
            if entry is None:
                entry = (threading.Lock(), SymbolAggregator(self.levels, self.radix))
                self._symbols[symbol] = entry
        lock, aggregator = entry
        with lock:
            aggregator.add_batch(values)

    def get_stats(self, symbol: str, k: int) -> StatsResult:
        """Statistics of window ``k`` for a symbol."""
        log.info("GET /stats/ - symbol: %s, k: %s", symbol, k)
        entry = self._symbols.get(symbol)
        if entry is not None:
            lock, aggregator = entry
            with lock:
                stats = aggregator.get_stats(k)
            if stats is not None:
                return stats
        error = SymbolNotFound(symbol)
        log.warning("%s", error)
        raise error


def _parse_values(raw: object) -> list[float]:
    if not isinstance(raw, list):
        raise InvalidRequest("values must be a list of numbers")
    values: list[float] = []
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, Real):
            raise InvalidRequest("values must be a list of numbers")
        values.append(float(item))
    return values


def _parse_k(raw: Optional[str]) -> int:
    if raw is None:
        raise InvalidRequest("missing field `k`")
    try:
        k = int(raw)
    except ValueError:
        raise InvalidRequest("k must be an unsigned integer") from None
    if not 0 <= k <= MAX_K:
        raise InvalidRequest("k must be an unsigned integer")
    return k


def build_app(registry: Optional[SymbolRegistry] = None) -> Starlette:
    """Create the web application around ``registry`` (a fresh one by default)."""
    registry = registry if registry is not None else SymbolRegistry()

    async def add_batch(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            raise InvalidRequest("body is not valid JSON") from None
        if not isinstance(payload, dict):
            raise InvalidRequest("body must be a JSON object")
        symbol = payload.get("symbol")
        if not isinstance(symbol, str):
            raise InvalidRequest("symbol must be a string")
        values = _parse_values(payload.get("values"))
        registry.add_batch(symbol, values)
        return JSONResponse({"status": "ok"}, status_code=201)

    async def get_stats(request: Request) -> JSONResponse:
        symbol = request.query_params.get("symbol")
        if symbol is None:
            raise InvalidRequest("missing field `symbol`")
        k = _parse_k(request.query_params.get("k"))
        stats = registry.get_stats(symbol, k)
        return JSONResponse(stats.to_dict())

    async def handle_error(request: Request, exc: Exception) -> JSONResponse:
        assert isinstance(exc, StatsError)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    app = Starlette(
        routes=[
            Route("/add_batch/", add_batch, methods=["POST"]),
            Route("/stats/", get_stats, methods=["GET"]),
        ],
        exception_handlers={StatsError: handle_error},
    )
    app.state.registry = registry
    return app


def start_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve the application until interrupted."""
    logging.basicConfig(level=logging.INFO)
    log.info("Server running at http://%s:%d", host, port)
    uvicorn.run(build_app(), host=host, port=port)


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sliding-window statistics server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(list(argv) if argv is not None else None)
    start_server(args.host, args.port)
    return 0