# faststats

A small HTTP service that takes in batches of floating-point values per symbol
and answers rolling-window statistics: `min`, `max`, `last`, `avg` and `var`.

Windows are nested. Level `k` covers the last `10**k` values, for `k` from 1
to 8. The largest window answers in constant time. Smaller windows answer in
constant time when a cached position is still valid and in logarithmic time
when it is not. Sums use compensated (Neumaier) summation, so adding large and
small values together loses little precision.

## Installation

```
pip install .
```

## Running the server

```
faststats
```

By default the server listens on `127.0.0.1:3000`. Use `--host` and `--port`
to change this:

```
faststats --host 0.0.0.0 --port 8080
```

## HTTP API

### `POST /add_batch/`

Appends values to a symbol and creates the symbol if it is new.

```json
{"symbol": "ABC", "values": [1.0, 2.5, 3.25]}
```

A successful request gets `201 Created` with `{"status": "ok"}`.

The response is `400 Bad Request` with an `{"error": "..."}` body in these cases:

- the batch holds more than 10,000 values;
- the symbol is blank;
- the body is not a JSON object;
- `symbol` is not a string;
- `values` is not a list of numbers.

A value is skipped when its square would make the running sum of squares
infinite or NaN.

### `GET /stats/?symbol=ABC&k=3`

Returns statistics over the last `10**k` values of the symbol:

```json
{"min": 1.0, "max": 3.25, "last": 3.25, "avg": 2.25, "var": 0.875}
```

The response is `404 Not Found` when the symbol is unknown, when it has no
values, or when `k` is outside `1..8`. It is `400 Bad Request` when `symbol`
or `k` is missing, or when `k` is not an unsigned 32-bit integer. A field that
is not a finite number, such as a variance that overflowed, is returned as
`null`.

## Library use

The core classes work without the server:

```python
from faststats.aggregator import SymbolAggregator

agg = SymbolAggregator(levels=4, radix=2)
agg.add_batch([1.0, 2.0, 3.0, 4.0, 5.0])
stats = agg.get_stats(1)
print(stats.min, stats.max, stats.last, stats.avg, stats.var)  # 4.0 5.0 5.0 4.5 0.25
```

Other modules:

- `faststats.app`:
  - `SymbolRegistry` keeps one thread-safe aggregator per symbol.
  - `build_app(registry)` returns the Starlette application that serves it.
  - `start_server(host, port)` runs the application with uvicorn.
- `faststats.errors` holds `StatsError` and its subclasses `InvalidRequest`,
  `SymbolNotFound`, `TooManyValues` and `InternalError`. Each subclass carries
  its HTTP status and its error body.
- `faststats.kahan.NeumaierSum` is the compensated sum.
- `faststats.monotonic_queue` holds `SharedMonotonicQueue` and `MonotonicQueue`,
  which give windowed minimum and maximum values.
- `faststats.sampling.generate_random_data(n, base, drift, volatility)`
  produces a random-walk price series rounded to two decimals.

## Limitations

All data lives in memory. Nothing is persisted, and every symbol is lost when
the server stops.

## Tests

```
pip install ".[test]"
pytest
```