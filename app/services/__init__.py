"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services receive the request's caller explicitly, apply validation and
refusal semantics (404 for hidden rows, 403 for foreign owners, 422 for
integrity rules), and call repositories for DB access. Routers commit.
"""
