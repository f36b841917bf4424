"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Tenant tables extend BaseRepository, whose queries are always filtered by
the caller's row policy; analytics and integrity repositories run
owner-explicit aggregations.
"""
