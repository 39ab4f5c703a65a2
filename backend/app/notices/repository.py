# backend/app/notices/repository.py

"""
お知らせの永続化を担当するリポジトリ層。

- NoticeRepository: save / list_all の最小インターフェース
- MongoNoticeRepository: MongoDB をドキュメントストアとして使う本番実装
- InMemoryNoticeRepository: テスト・ローカル起動用のインメモリ実装

どの実装もキャッシュは持たず、呼び出しごとにストアを直接読み書きする。
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Protocol, Union

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .config import NoticeStoreSettings
from .errors import StorageError
from .schemas import Notice

logger = logging.getLogger(__name__)


class NoticeRepository(Protocol):
    """
    お知らせリポジトリの最小インターフェース。

    実装例:
    - MongoNoticeRepository: MongoDB コレクションに保存
    - InMemoryNoticeRepository: プロセス内のリストに保存
    """

    def save(self, notice: Notice) -> Notice:  # pragma: no cover - Protocol
        ...

    def list_all(self) -> List[Notice]:  # pragma: no cover - Protocol
        ...


def _to_document_id(notice_id: str) -> Union[ObjectId, str]:
    # 外部から id 付きで渡された場合は ObjectId 形式のときだけ変換する
    if ObjectId.is_valid(notice_id):
        return ObjectId(notice_id)
    return notice_id


class MongoNoticeRepository:
    """
    MongoDB コレクションをバックエンドにしたリポジトリ。

    - 呼び出しごとにクライアントセッションを開いて閉じる（作業単位 = 1 呼び出し）
    - deadline は ISO8601 文字列で保存し、オフセットやマイクロ秒まで正確に往復させる
    - days_left はドキュメントに含めない
    """

    def __init__(
        self,
        client: MongoClient,
        database: str = "notices",
        collection: str = "notices",
    ) -> None:
        self._client = client
        self._collection = client[database][collection]

    @classmethod
    def from_settings(cls, settings: NoticeStoreSettings) -> "MongoNoticeRepository":
        """
        設定値から MongoClient を組み立ててリポジトリを生成する。

        MongoClient は遅延接続のため、ここではまだサーバへ接続しない。
        """
        client: MongoClient = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.timeout_ms,
        )
        return cls(client, database=settings.database, collection=settings.collection)

    def save(self, notice: Notice) -> Notice:
        """
        お知らせを保存し、id を付与したコピーを返す。

        id が既にある場合は同じ id のドキュメントを置き換える（upsert）。
        """
        document: Dict[str, Any] = {
            "subject": notice.subject,
            "deadline": notice.deadline.isoformat(),
        }

        try:
            with self._client.start_session() as session:
                if notice.id is None:
                    result = self._collection.insert_one(document, session=session)
                    notice_id = str(result.inserted_id)
                else:
                    self._collection.replace_one(
                        {"_id": _to_document_id(notice.id)},
                        document,
                        upsert=True,
                        session=session,
                    )
                    notice_id = notice.id
        except PyMongoError as exc:
            raise StorageError(f"Failed to save notice: {exc}") from exc

        logger.debug("Saved notice %s", notice_id)
        return notice.model_copy(update={"id": notice_id})

    def list_all(self) -> List[Notice]:
        """
        保存済みのお知らせを全件返す。順序はストアの返却順に従う。
        """
        try:
            with self._client.start_session() as session:
                documents = list(self._collection.find({}, session=session))
        except PyMongoError as exc:
            raise StorageError(f"Failed to list notices: {exc}") from exc

        return [self._to_notice(document) for document in documents]

    @staticmethod
    def _to_notice(document: Dict[str, Any]) -> Notice:
        try:
            return Notice(
                id=str(document["_id"]),
                subject=document["subject"],
                deadline=document["deadline"],
            )
        except (KeyError, PydanticValidationError) as exc:
            raise StorageError(
                f"Stored notice document {document.get('_id')!r} is malformed."
            ) from exc


class InMemoryNoticeRepository:
    """
    プロセス内のリストに保存するリポジトリ。

    id は "notices/1", "notices/2", ... の連番で採番する。
    呼び出し側が保存済みの状態を書き換えられないよう、常にコピーを返す。
    """

    def __init__(self) -> None:
        self._notices: List[Notice] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def save(self, notice: Notice) -> Notice:
        with self._lock:
            if notice.id is None:
                stored = notice.model_copy(update={"id": f"notices/{self._next_id}"})
                self._next_id += 1
                self._notices.append(stored)
            else:
                stored = notice.model_copy()
                for index, existing in enumerate(self._notices):
                    if existing.id == stored.id:
                        self._notices[index] = stored
                        break
                else:
                    self._notices.append(stored)

        return stored.model_copy()

    def list_all(self) -> List[Notice]:
        with self._lock:
            return [notice.model_copy() for notice in self._notices]
