"""
Stage tracing for the harvest pipeline.

``@traced("harvest.stage.enrich")`` runs an async stage method inside its own
span. Arguments become span attributes (sequences only by length), and one
workflow-step event records the outcome, the duration and, for stages that
return a list, how many items came out.
"""

from __future__ import annotations

import functools
import inspect
import time
from collections.abc import Sized
from typing import Any, Callable

from loguru import logger

from place_harvester.infrastructure.observability import get_observability_manager


def _argument_attributes(prefix: str, arguments: dict[str, Any]) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    for name, value in arguments.items():
        if name == "self":
            continue
        if isinstance(value, (list, tuple)):
            attributes[f"{prefix}.{name}.count"] = len(value)
        else:
            attributes[f"{prefix}.{name}"] = str(value)
    return attributes


def traced(span_name: str, step_type: str = "stage") -> Callable:
    """Trace an async pipeline stage under ``span_name``."""

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)
        stage = func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            observability = get_observability_manager()
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            attributes = {
                "harvest.step.type": step_type,
                "harvest.step.name": stage,
                **_argument_attributes(f"harvest.{step_type}.arg", bound.arguments),
            }

            metadata: dict[str, Any] = {}
            succeeded = False
            started = time.perf_counter()
            with observability.create_span(name=span_name, attributes=attributes):
                try:
                    result = await func(*args, **kwargs)
                    succeeded = True
                    if isinstance(result, Sized):
                        metadata["result_count"] = len(result)
                    return result
                except Exception as e:
                    metadata["error"] = f"{type(e).__name__}: {e}"
                    raise
                finally:
                    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
                    observability.record_workflow_step(
                        step_name=stage,
                        step_type=step_type,
                        duration_ms=elapsed_ms,
                        success=succeeded,
                        metadata=metadata,
                    )
                    if succeeded:
                        logger.debug(f"Stage {stage} done in {elapsed_ms}ms {metadata}")
                    else:
                        logger.error(f"Stage {stage} failed in {elapsed_ms}ms: {metadata.get('error')}")

        return wrapper

    return decorator
