# backend/app/notices/__init__.py

"""
お知らせ（Notice）機能モジュール。

- config: ドキュメントストアの設定値
- schemas: Notice エンティティと受信ペイロード
- errors: ValidationError / StorageError
- repository: NoticeRepository と MongoDB / インメモリ実装
- service: 登録・通知のビジネスロジック
- router: /notice エンドポイント
"""

from .errors import NoticeServiceError, StorageError, ValidationError  # noqa: F401
from .schemas import Notice, NoticeCreateRequest  # noqa: F401
from .service import NoticeService  # noqa: F401
