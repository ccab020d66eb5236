"""실행 시간 측정 유틸리티 모듈 (Execution-time measurement helper)."""

import time
from collections.abc import Awaitable, Callable

from zacatl.logs import logger


async def measure_execution_time(
    process_name: str,
    callback: Callable[[], Awaitable[None]],
    skip_output: bool = False,
) -> float:
    """비동기 콜백의 실행 시간을 측정하고 로그로 남깁니다.

    Await ``callback`` and log start and duration under ``process_name``.

    Returns:
        float: 실행 시간(ms) (Elapsed milliseconds, rounded to 2 decimals)
    """
    if not skip_output:
        logger.info(f"{process_name} execution started")

    start: float = time.perf_counter()
    await callback()
    duration_ms: float = round((time.perf_counter() - start) * 1000, 2)

    if not skip_output:
        logger.info(f"{process_name} execution time: {duration_ms:.2f} ms")

    return duration_ms
