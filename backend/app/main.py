# backend/app/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /notice, /notice/notification エンドポイントを公開する
- /health エンドポイントを公開する
- 全リクエストのトレースログを出力する
"""

from fastapi import FastAPI

from app.notices.router import router as notice_router
from app.utils.config import get_env, get_env_int
from app.utils.tracing import configure_logging, install_request_tracing


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - お知らせ登録エンドポイント (/notice)
    - 通知送信エンドポイント (/notice/notification)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Notice Tracker")

    install_request_tracing(app)

    # ルーター登録
    app.include_router(notice_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


def serve() -> None:
    """
    uvicorn でアプリを起動する。

    任意:
      - NOTICES_HOST (デフォルト: 0.0.0.0)
      - NOTICES_PORT (デフォルト: 6786)
      - LOG_LEVEL    (デフォルト: INFO)
    """
    import uvicorn

    log_level = get_env("LOG_LEVEL", default="INFO", required=False)
    configure_logging(log_level)

    uvicorn.run(
        app,
        host=get_env("NOTICES_HOST", default="0.0.0.0", required=False),
        port=get_env_int("NOTICES_PORT", default=6786),
        log_level=log_level.lower(),
    )


# uvicorn 実行時のエントリーポイント
app = create_app()


if __name__ == "__main__":
    serve()
