# tourlead/services/actions.py
from __future__ import annotations

import functools
from typing import Awaitable, Callable

from tourlead.core.exceptions import BaseAPIException
from tourlead.core.logging import get_structlog_logger
from tourlead.schemas.offers import ActionResult
from tourlead.services import messages

logger = get_structlog_logger()


def action_boundary(operation: str):
    """
    Turn every error raised by a user action into a failed ActionResult.

    Known errors keep their message. Anything else is logged with its
    traceback and reported with a generic message.
    """

    def decorator(func: Callable[..., Awaitable[ActionResult]]):
        @functools.wraps(func)
        async def wrapper(self, actor_id: str, *args, **kwargs) -> ActionResult:
            try:
                result = await func(self, actor_id, *args, **kwargs)
            except BaseAPIException as e:
                logger.info(
                    "action.failed",
                    operation=operation,
                    actor_id=actor_id,
                    error_kind=type(e).__name__,
                    code=e.code,
                    reason=e.message,
                )
                return ActionResult.fail(e.message)
            except Exception as e:
                logger.error(
                    "action.crashed",
                    operation=operation,
                    actor_id=actor_id,
                    error_type=type(e).__name__,
                    error=str(e),
                    exc_info=True,
                )
                return ActionResult.fail(messages.UNEXPECTED_ERROR)

            logger.info("action.succeeded", operation=operation, actor_id=actor_id)
            return result

        return wrapper

    return decorator
