from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

import uvicorn

from hotcoffee.infrastructure.observability.logging_config import configure_logging
from hotcoffee.infrastructure.storage.settings import (
    DEFAULT_DATA_DIR,
    InvalidDataDirError,
    ensure_storage,
    validate_data_dir,
)

MIN_PORT = 1024
DEFAULT_PORT = 8080

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hotcoffee",
        description="Coffee Shop Management System",
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port of the server")
    parser.add_argument("--dir", default=DEFAULT_DATA_DIR, help="data directory")
    parser.add_argument("--host", default="0.0.0.0", help="interface to bind")
    args = parser.parse_args(argv)

    if args.port < MIN_PORT:
        parser.error(f"port couldn't be less than {MIN_PORT}")
    try:
        args.data_dir = validate_data_dir(args.dir)
    except InvalidDataDirError as exc:
        parser.error(str(exc))
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()

    ensure_storage(args.data_dir)
    os.environ["HOTCOFFEE_DATA_DIR"] = str(args.data_dir)

    from hotcoffee.api.main import create_app

    logger.info("server_starting", extra={"port": args.port, "data_dir": str(args.data_dir)})
    # Collection locks live in this process, so the server must stay single-worker.
    uvicorn.run(create_app(args.data_dir), host=args.host, port=args.port, workers=1)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
