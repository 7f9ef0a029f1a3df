# apps/core/actions.py

"""
Validated commands

A command is a plain function ``handler(context, data)`` wrapped by
``safe_action``. The wrapper rejects unauthorized callers and malformed
input before the handler runs, and turns every expected failure into an
ActionResult instead of an exception:

- ActionError raised by the handler becomes ``error`` with its code
- DatabaseError and any other unexpected error become the command's
  generic failure message, with the traceback logged
"""

import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Dict, List, Optional

from django.db import DatabaseError

logger = logging.getLogger(__name__)

# Result codes
UNAUTHORIZED = 'unauthorized'
NOT_FOUND = 'not_found'
INVALID = 'invalid'
FAILED = 'failed'
QUOTA_EXCEEDED = 'quota_exceeded'


class ActionError(Exception):
    """Expected command failure carrying a user-facing message"""

    code = FAILED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(ActionError):
    code = UNAUTHORIZED

    def __init__(self, message: str = 'Unauthorized'):
        super().__init__(message)


class NotFound(ActionError):
    code = NOT_FOUND


class QuotaExceeded(ActionError):
    code = QUOTA_EXCEEDED


@dataclass
class ActionResult:
    """Outcome of a command: data on success, error or field errors otherwise"""

    data: Any = None
    error: Optional[str] = None
    field_errors: Dict[str, List[str]] = field(default_factory=dict)
    code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.field_errors

    def to_dict(self) -> Dict:
        if self.field_errors:
            return {'field_errors': self.field_errors, 'error': self.error}
        if self.error is not None:
            return {'error': self.error}
        return {'data': self.data}


def safe_action(form_class, failure_message: str = 'Something went wrong'):
    """
    Wrap a command handler with authorization and input validation

    The wrapped command takes ``(context, data)`` where data is a plain
    dict (JSON body or POST data). The handler receives the form's
    cleaned_data.
    """

    def decorator(handler):
        @wraps(handler)
        def command(context, data) -> ActionResult:
            if context is None or not context.is_complete:
                return ActionResult(error='Unauthorized', code=UNAUTHORIZED)

            form = form_class(data=data or {})
            if not form.is_valid():
                field_errors = {
                    name: [str(message) for message in messages]
                    for name, messages in form.errors.items()
                }
                return ActionResult(
                    error='Invalid input',
                    field_errors=field_errors,
                    code=INVALID,
                )

            try:
                return ActionResult(data=handler(context, form.cleaned_data))
            except ActionError as e:
                return ActionResult(error=e.message, code=e.code)
            except DatabaseError:
                logger.exception(
                    "Command %s failed for org %s", handler.__name__, context.org_id
                )
                return ActionResult(error=failure_message, code=FAILED)
            except Exception:
                logger.exception(
                    "Command %s crashed for org %s", handler.__name__, context.org_id
                )
                return ActionResult(error=failure_message, code=FAILED)

        command.form_class = form_class
        return command

    return decorator
