# backend/app/notices/router.py

"""
お知らせ用の FastAPI ルーター定義。

- POST /notice               : お知らせを 1件登録
- POST /notice/notification  : 全お知らせの残り日数をメール送信
"""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from starlette.concurrency import run_in_threadpool

from app.notifications.factory import get_email_sender
from app.notifications.service import DeliveryError

from .config import NoticeStoreSettings, get_notice_store_settings
from .errors import StorageError, ValidationError
from .repository import InMemoryNoticeRepository, MongoNoticeRepository, NoticeRepository
from .service import NoticeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notice", tags=["notice"])


def build_notice_repository(settings: NoticeStoreSettings) -> NoticeRepository:
    """
    設定の backend に応じてリポジトリ実装を選ぶ。
    """
    if settings.backend == "memory":
        return InMemoryNoticeRepository()
    return MongoNoticeRepository.from_settings(settings)


@lru_cache()
def get_notice_service() -> NoticeService:
    """
    NoticeService のシングルトンインスタンスを取得する。

    NOTE:
    - リポジトリとメール送信は環境変数の設定から組み立てる。
    - テストでは app.dependency_overrides で差し替える。
    """
    repository = build_notice_repository(get_notice_store_settings())
    return NoticeService(repository=repository, email_sender=get_email_sender())


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="お知らせを登録",
    description="JSON {subject, deadline} を受け取り、お知らせを 1件保存する。",
)
async def create_notice(
    request: Request,
    service: NoticeService = Depends(get_notice_service),
) -> Response:
    """
    お知らせ登録エンドポイント。

    - ペイロード不正 → 400 Bad Request
    - ストア障害 → 500 Internal Server Error
    """
    payload = await request.body()

    try:
        await run_in_threadpool(service.create_notice, payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "errors": exc.errors},
        ) from exc
    except StorageError as exc:
        logger.exception("Failed to store notice.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store notice.",
        ) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/notification",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="全お知らせの残り日数をメール送信",
)
def send_notice_notification(
    service: NoticeService = Depends(get_notice_service),
) -> Response:
    """
    通知送信エンドポイント。

    - ストア障害 → 500 Internal Server Error
    - メール送信失敗 → 502 Bad Gateway
    """
    try:
        service.send_notice_notification()
    except StorageError as exc:
        logger.exception("Failed to read notices for notification.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to read notices.",
        ) from exc
    except DeliveryError as exc:
        logger.exception("Failed to deliver notice notification.")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to send notice notification.",
        ) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
