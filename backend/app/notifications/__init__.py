# backend/app/notifications/__init__.py

"""
通知（メール送信）レイヤ用モジュール群。

構成:
- schemas: 送信メッセージの共通スキーマ
- config: SMTP 接続設定
- service: 送信インターフェース（EmailSender）と SMTP / インメモリ実装
- factory: アプリ全体で共有する EmailSender の生成
"""
