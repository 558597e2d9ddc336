"""
Catalog loader: ticket types and tax types for one summit.

Both lists are fetched concurrently and published only once both have
arrived. If either call fails the whole load fails and neither list is
kept; the caller never sees a half-loaded catalog.
"""

import asyncio

from registration_lite.core.logging import get_logger
from registration_lite.core.metrics import record_catalog_fetch
from registration_lite.infrastructure.api_client import ApiFailure
from registration_lite.schemas.catalog import CatalogSnapshot, TaxType, TicketType
from registration_lite.schemas.events import WidgetEvent
from registration_lite.services.busy_gate import widget_loading
from registration_lite.services.context import WidgetContext
from registration_lite.services.error_handling import handle_api_failure

logger = get_logger(__name__)


def _page_data(body) -> list:
    if isinstance(body, dict):
        return body.get("data") or []
    return []


async def get_ticket_types(ctx: WidgetContext, summit_id: int) -> list[TicketType]:
    """Ticket types the current user may buy, with badge type, access levels and features."""
    access_token = await ctx.get_access_token()
    params = {
        "expand": ctx.settings.TICKET_TYPES_EXPAND,
        "access_token": access_token,
    }
    result = await ctx.api.get(ctx.api_url(f"/summits/{summit_id}/ticket-types/allowed"), params)
    if isinstance(result, ApiFailure):
        raise await handle_api_failure(ctx, result)
    return [TicketType.model_validate(t) for t in _page_data(result.body)]


async def get_tax_types(ctx: WidgetContext, summit_id: int) -> list[TaxType]:
    access_token = await ctx.get_access_token()
    params = {"access_token": access_token}
    result = await ctx.api.get(ctx.api_url(f"/summits/{summit_id}/tax-types"), params)
    if isinstance(result, ApiFailure):
        raise await handle_api_failure(ctx, result)
    return [TaxType.model_validate(t) for t in _page_data(result.body)]


async def get_ticket_types_and_taxes(ctx: WidgetContext, summit_id: int) -> CatalogSnapshot:
    """
    Load the catalog for `summit_id`.

    On success both lists replace whatever the session held before.
    On failure the error that arrived first is raised, once the other
    fetch has settled too.
    """
    with widget_loading(ctx.dispatch, "load_catalog"):
        ctx.dispatch(WidgetEvent.TICKET_TYPES_REQUESTED, summit_id)

        tasks = [
            asyncio.ensure_future(get_ticket_types(ctx, summit_id)),
            asyncio.ensure_future(get_tax_types(ctx, summit_id)),
        ]
        first_error = None
        for next_done in asyncio.as_completed(tasks):
            try:
                await next_done
            except Exception as error:
                if first_error is None:
                    first_error = error

        if first_error is not None:
            record_catalog_fetch(loaded=False)
            logger.warning("catalog_fetch_failed", summit_id=summit_id, error=repr(first_error))
            raise first_error

        ticket_types, tax_types = (task.result() for task in tasks)
        ctx.dispatch(WidgetEvent.TICKET_TYPES_LOADED, tuple(ticket_types))
        ctx.dispatch(WidgetEvent.TAX_TYPES_LOADED, tuple(tax_types))

    record_catalog_fetch(loaded=True)
    logger.info(
        "catalog_loaded",
        summit_id=summit_id,
        ticket_types=len(ticket_types),
        tax_types=len(tax_types),
    )
    return CatalogSnapshot(
        summit_id=summit_id,
        ticket_types=tuple(ticket_types),
        tax_types=tuple(tax_types),
    )
