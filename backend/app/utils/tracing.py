# backend/app/utils/tracing.py

"""
リクエスト単位のトレースログと未処理例外ログ。

- 全リクエストについて method / path / status / 処理時間(ms) を INFO で出力する
- ハンドラから漏れた例外はトレースバック付きで記録した上で再送出する
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """
    ルートロガーのフォーマットとレベルを設定する。

    uvicorn 経由で起動する serve() からのみ呼ばれる想定。
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def install_request_tracing(app: FastAPI) -> None:
    """
    FastAPI アプリにトレース用 HTTP ミドルウェアを登録する。
    """

    @app.middleware("http")
    async def trace_calls(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on %s %s", request.method, request.url.path
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
