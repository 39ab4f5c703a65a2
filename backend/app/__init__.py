
# backend/app/__init__.py
"""
Notice Tracker backend application package.

This package contains:
- main: FastAPI application entrypoint
- notices: notice entity, repository, service and HTTP router
- notifications: email sender interface and SMTP implementation
- utils: environment config, clock and request tracing helpers
"""
