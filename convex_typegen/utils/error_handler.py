"""Centralized error handler for convex-typegen commands."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from pathlib import Path
from typing import Any

import click

from convex_typegen.utils.logging import get_request_id, logger

from .constants import ERROR_LOG_FILE


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that logs unexpected command failures before surfacing them."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            error_log = Path(kwargs.get("root") or ".") / ERROR_LOG_FILE
            try:
                error_log.parent.mkdir(parents=True, exist_ok=True)
                with open(error_log, "a", encoding="utf-8") as f:
                    f.write("\n" + "=" * 80 + "\n")
                    f.write(f"[{datetime.now().isoformat()}] Error in command: {func.__name__} (request {get_request_id()})\n")
                    f.write("=" * 80 + "\n")
                    f.write(f"{error_type}: {error_msg}\n\n")
                    f.write(traceback.format_exc())
                    f.write("=" * 80 + "\n\n")
                user_message = (
                    f"{error_type}: {error_msg}\n\n"
                    f"Full traceback logged to: {error_log}"
                )
            except OSError:
                user_message = f"{error_type}: {error_msg}"

            raise click.ClickException(user_message) from e

    return wrapper
