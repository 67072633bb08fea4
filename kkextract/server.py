from __future__ import annotations

import argparse
import logging
import sys
import threading
import time
from typing import Final

import httpx
import uvicorn

from kkextract.config import SUPPORTED_LOG_LEVELS, get_settings
from kkextract.web.app import app

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 8000
DEFAULT_READY_TIMEOUT_S: Final[float] = 20.0

logger = logging.getLogger(__name__)


class _ThreadedUvicornServer(uvicorn.Server):
    def install_signal_handlers(self) -> None:  # pragma: no cover
        return


def _client_host_for(bind_host: str) -> str:
    if bind_host in {"0.0.0.0", "::"}:
        return "127.0.0.1"
    return bind_host


def _wait_for_health(*, health_url: str, timeout_s: float) -> bool:
    deadline = time.monotonic() + timeout_s
    headers = {"User-Agent": "kkextract-server"}
    timeout = httpx.Timeout(1.0)

    # Loopback readiness checks must bypass any configured proxy.
    with httpx.Client(timeout=timeout, follow_redirects=False, trust_env=False) as client:
        while time.monotonic() < deadline:
            try:
                response = client.get(health_url, headers=headers)
                if response.status_code == 200 and (response.text or "").strip() == "ok":
                    return True
            except httpx.HTTPError:
                pass
            time.sleep(0.2)

    return False


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Family card extraction service (Uvicorn)")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port (default: 8000)")
    parser.add_argument(
        "--ready-timeout",
        type=float,
        default=DEFAULT_READY_TIMEOUT_S,
        help="Seconds to wait for server readiness (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        default=None,
        help="Log level (default: KKEXTRACT_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    log_level = args.log_level or get_settings().log_level
    logging.basicConfig(level=log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    config = uvicorn.Config(
        app,
        host=args.host,
        port=args.port,
        log_level=log_level.lower(),
    )
    server = _ThreadedUvicornServer(config=config)
    server_thread = threading.Thread(target=server.run, name="kkextract-uvicorn", daemon=True)
    server_thread.start()

    try:
        client_host = _client_host_for(args.host)
        health_url = f"http://{client_host}:{args.port}/health"
        if not _wait_for_health(health_url=health_url, timeout_s=args.ready_timeout):
            print(f"[ERROR] Server did not become ready: {health_url}", file=sys.stderr)
            return 1

        logger.info("Serving on http://%s:%d (POST /extract)", client_host, args.port)
        while server_thread.is_alive():
            server_thread.join(timeout=0.5)
        return 0
    except KeyboardInterrupt:
        return 0
    finally:
        server.should_exit = True
        server_thread.join(timeout=5.0)


if __name__ == "__main__":
    raise SystemExit(main())
