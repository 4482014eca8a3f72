"""Timing observations around collaborator calls.

An observation records the step name, its low-cardinality labels, the elapsed
time and, when the step raised, the exception type. Recording never changes
the wrapped step's result and never swallows its exceptions.
"""

from __future__ import annotations

import functools
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional, TypeVar

from .utils.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class Observation:
    name: str
    labels: Dict[str, str] = field(default_factory=dict)
    duration_ms: float = 0.0
    error: Optional[str] = None


class ObservationRegistry:
    """Keep the most recent observations and log each one as it completes."""

    def __init__(self, *, max_records: int = 1000) -> None:
        self._records: Deque[Observation] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    def record(self, observation: Observation) -> None:
        with self._lock:
            self._records.append(observation)
        logger.info(
            "%s completed",
            observation.name,
            extra={
                "operation": observation.name,
                "latency_ms": round(observation.duration_ms, 2),
                "error": observation.error,
                "labels": dict(observation.labels),
            },
        )

    @property
    def observations(self) -> List[Observation]:
        with self._lock:
            return list(self._records)

    def names(self) -> List[str]:
        return [item.name for item in self.observations]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    @contextmanager
    def observe(self, name: str, **labels: Any) -> Iterator[None]:
        """Time the enclosed block and record it, re-raising any error."""

        start = time.perf_counter()
        error: Optional[str] = None
        try:
            yield
        except BaseException as exc:
            error = type(exc).__name__
            raise
        finally:
            self.record(
                Observation(
                    name=name,
                    labels={key: str(value) for key, value in labels.items()},
                    duration_ms=(time.perf_counter() - start) * 1000,
                    error=error,
                )
            )

    def observed(self, name: str, **labels: Any) -> Callable[[F], F]:
        """Decorator form of :meth:`observe` for wrapping a collaborator call."""

        def decorator(func: F) -> F:
            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                with self.observe(name, **labels):
                    return func(*args, **kwargs)

            return wrapper  # type: ignore[return-value]

        return decorator
