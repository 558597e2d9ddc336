"""
Purchase step state machine.

Manual navigation is unconditional: any step may move to any other. The
automatic transitions live with the operations that trigger them:
  reservation created with amount due  -> PAYMENT
  reservation deletion attempted       -> SELECT_TICKET
"""

from typing import Union

from registration_lite.core.logging import get_logger
from registration_lite.schemas.events import Dispatch, PurchaseStep, WidgetEvent
from registration_lite.services.busy_gate import widget_loading

logger = get_logger(__name__)


def change_step(dispatch: Dispatch, step: Union[PurchaseStep, int]) -> PurchaseStep:
    """Move to `step`. Raises ValueError for an ordinal outside the flow."""
    step = PurchaseStep(step)
    with widget_loading(dispatch, "change_step"):
        dispatch(WidgetEvent.STEP_CHANGED, step)
    logger.debug("step_changed", step=step.name)
    return step
