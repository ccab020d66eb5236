"""실행 런타임 감지 모듈.

Runtime detection: reports which Python implementation and version the
service is running on.
"""

import platform
from dataclasses import dataclass
from typing import Literal

RuntimeType = Literal["cpython", "pypy", "unknown"]


@dataclass(frozen=True)
class RuntimeInfo:
    """런타임 정보 (Detected runtime type and version)."""

    type: RuntimeType
    version: str | None
    is_cpython: bool
    is_pypy: bool


def detect_runtime() -> RuntimeInfo:
    implementation: str = platform.python_implementation()
    runtime_type: RuntimeType
    if implementation == "CPython":
        runtime_type = "cpython"
    elif implementation == "PyPy":
        runtime_type = "pypy"
    else:
        runtime_type = "unknown"

    version: str | None = platform.python_version() or None
    return RuntimeInfo(
        type=runtime_type,
        version=version,
        is_cpython=runtime_type == "cpython",
        is_pypy=runtime_type == "pypy",
    )


def get_runtime_type() -> RuntimeType:
    return detect_runtime().type


def get_runtime_version() -> str | None:
    return detect_runtime().version
