"""유틸리티 패키지 — 예외, 인코딩, 타이밍 헬퍼.

Utility package: Exceptions, encoding and timing helpers.
"""
