"""
Widget busy gate.

A liveness signal for the UI: LOADING_START before an operation, LOADING_STOP
once it settles, whatever the outcome. It does not serialize operations.
"""

import uuid
from contextlib import contextmanager

import structlog

from registration_lite.schemas.events import Dispatch, WidgetEvent


@contextmanager
def widget_loading(dispatch: Dispatch, operation: str):
    operation_id = str(uuid.uuid4())[:8]
    with structlog.contextvars.bound_contextvars(operation=operation, operation_id=operation_id):
        dispatch(WidgetEvent.LOADING_START)
        try:
            yield
        finally:
            dispatch(WidgetEvent.LOADING_STOP)
