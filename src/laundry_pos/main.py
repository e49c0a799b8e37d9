from __future__ import annotations

import sys

import uvicorn

from laundry_pos.adapters.inbound.cli import run_quote_cli
from laundry_pos.bootstrap import build_usecases
from laundry_pos.config import load_settings
from laundry_pos.logging_config import configure_logging


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    uvicorn.run(
        "laundry_pos.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,
    )


def quote(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    if not argv:
        print("usage: laundry-pos-quote '<json>'")
        return 2

    settings = load_settings()
    configure_logging(settings)
    return run_quote_cli(build_usecases(settings).quote, argv[0])


if __name__ == "__main__":
    raise SystemExit(quote())
