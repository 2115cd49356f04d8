"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from urllib.parse import urlencode

from fastapi import FastAPI, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from food_expiry.api.models import FoodCreate, ReferenceCreate
from food_expiry.api.pages import render_index_page
from food_expiry.app_logging import configure_logging
from food_expiry.containers import AppContainer
from food_expiry.domain.expiry import calculate_expiry_date
from food_expiry.domain.inventory import FoodEntry, FoodRow, ReferenceEntry
from food_expiry.services.inventory import InventoryValidationError
from food_expiry.services.reminders import run_reminder_loop


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            state_container.reminder_service.sweep()
        except Exception:
            logger.exception("Startup reminder sweep failed")
        interval = state_container.settings.reminder_interval_seconds
        sweep_task = None
        if interval > 0:
            sweep_task = asyncio.create_task(
                run_reminder_loop(state_container.reminder_service, interval)
            )
            logger.info("Reminder sweep scheduled every %s seconds", interval)
        yield
        if sweep_task is not None:
            sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweep_task
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request, email: str = "") -> HTMLResponse:
        """Render the inventory page."""
        return _render_page(request.app.state.container, email=email)

    @app.post("/foods", response_class=HTMLResponse, response_model=None)
    async def add_food_form(  # noqa: PLR0913
        request: Request,
        name: str = Form(default=""),
        location: str = Form(default=""),
        period: str = Form(default=""),
        expiry_date: str = Form(default=""),
        email: str = Form(default=""),
    ) -> HTMLResponse | RedirectResponse:
        """Register a food entry from the page form."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.inventory_service.add_food(
                name=name,
                location=location,
                period=period,
                expiry_date=expiry_date,
                email=email,
            )
        except InventoryValidationError as exc:
            return _render_page(
                state_container,
                email=email,
                selected=name,
                alert=str(exc),
                form_values={
                    "location": location,
                    "period": period,
                    "expiry_date": expiry_date,
                },
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        query = urlencode({"email": email.strip()})
        return RedirectResponse(f"/?{query}", status_code=status.HTTP_303_SEE_OTHER)

    @app.post("/foods/{food_id}/delete")
    async def delete_food_form(
        food_id: str, request: Request, confirmed: bool = Form(default=False)
    ) -> RedirectResponse:
        """Delete a food entry after the page confirmed it."""
        state_container: AppContainer = request.app.state.container
        state_container.inventory_service.delete_food(food_id, confirmed=confirmed)
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @app.post("/references", response_class=HTMLResponse, response_model=None)
    async def add_reference_form(
        request: Request,
        name: str = Form(default=""),
        location: str = Form(default=""),
        period: str = Form(default=""),
    ) -> HTMLResponse | RedirectResponse:
        """Register a reference entry from the page form."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.inventory_service.add_reference(
                name=name, location=location, period=period
            )
        except InventoryValidationError as exc:
            return _render_page(
                state_container,
                alert=str(exc),
                reference_values={
                    "name": name,
                    "location": location,
                    "period": period,
                },
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @app.post("/references/{reference_id}/delete")
    async def delete_reference_form(
        reference_id: str, request: Request, confirmed: bool = Form(default=False)
    ) -> RedirectResponse:
        """Delete a reference entry after the page confirmed it."""
        state_container: AppContainer = request.app.state.container
        state_container.inventory_service.delete_reference(
            reference_id, confirmed=confirmed
        )
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/api/foods")
    async def list_foods(request: Request) -> dict[str, object]:
        """Return food entries sorted by expiry date."""
        state_container: AppContainer = request.app.state.container
        rows = state_container.inventory_service.food_rows()
        return {"foods": [_serialize_row(row) for row in rows]}

    @app.post("/api/foods", status_code=status.HTTP_201_CREATED)
    async def create_food(payload: FoodCreate, request: Request) -> dict[str, object]:
        """Register a food entry."""
        state_container: AppContainer = request.app.state.container
        try:
            food = state_container.inventory_service.add_food(
                name=payload.name,
                location=payload.location,
                period=str(payload.period),
                expiry_date=payload.expiry_date,
                email=payload.email,
            )
        except InventoryValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        current = state_container.inventory_service.get_food(food.id)
        return _serialize_food(current or food)

    @app.delete("/api/foods/{food_id}")
    async def delete_food(
        food_id: str, request: Request, confirm: bool = False
    ) -> dict[str, bool]:
        """Delete a food entry when confirmed."""
        state_container: AppContainer = request.app.state.container
        deleted = state_container.inventory_service.delete_food(
            food_id, confirmed=confirm
        )
        return {"deleted": deleted}

    @app.get("/api/references")
    async def list_references(request: Request) -> dict[str, object]:
        """Return reference entries in insertion order."""
        state_container: AppContainer = request.app.state.container
        return {
            "references": [
                _serialize_reference(ref)
                for ref in state_container.inventory_service.references
            ]
        }

    @app.post("/api/references", status_code=status.HTTP_201_CREATED)
    async def create_reference(
        payload: ReferenceCreate, request: Request
    ) -> dict[str, object]:
        """Register a reference entry."""
        state_container: AppContainer = request.app.state.container
        try:
            reference = state_container.inventory_service.add_reference(
                name=payload.name, location=payload.location, period=payload.period
            )
        except InventoryValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return _serialize_reference(reference)

    @app.delete("/api/references/{reference_id}")
    async def delete_reference(
        reference_id: str, request: Request, confirm: bool = False
    ) -> dict[str, bool]:
        """Delete a reference entry when confirmed."""
        state_container: AppContainer = request.app.state.container
        deleted = state_container.inventory_service.delete_reference(
            reference_id, confirmed=confirm
        )
        return {"deleted": deleted}

    @app.get("/api/references/autofill")
    async def autofill(name: str, request: Request) -> dict[str, object]:
        """Suggest form values from the first reference with the given name."""
        state_container: AppContainer = request.app.state.container
        suggestion = state_container.inventory_service.autofill(name)
        if suggestion is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {
            "location": suggestion.location,
            "period_days": suggestion.period_days,
            "expiry_date": _iso_or_none(suggestion.expiry_date),
        }

    @app.get("/api/expiry-date")
    async def expiry_date(period: int, request: Request) -> dict[str, str | None]:
        """Return the expiry date for a storage period starting today."""
        state_container: AppContainer = request.app.state.container
        return {
            "expiry_date": _iso_or_none(
                calculate_expiry_date(period, state_container.clock())
            )
        }

    @app.post("/api/reminders/sweep")
    async def sweep_reminders(request: Request) -> dict[str, object]:
        """Run the reminder sweep on demand."""
        state_container: AppContainer = request.app.state.container
        dispatched = state_container.reminder_service.sweep()
        return {"dispatched": [food.id for food in dispatched]}

    return app


def _render_page(  # noqa: PLR0913
    container: AppContainer,
    email: str = "",
    selected: str | None = None,
    alert: str | None = None,
    form_values: dict[str, str] | None = None,
    reference_values: dict[str, str] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """Render the inventory page from current state."""
    inventory = container.inventory_service
    html = render_index_page(
        rows=inventory.food_rows(),
        references=inventory.references,
        options=inventory.food_name_options(selected),
        email=email,
        alert=alert,
        form_values=form_values,
        reference_values=reference_values,
    )
    return HTMLResponse(html, status_code=status_code)


def _iso_or_none(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _serialize_food(food: FoodEntry) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "location": food.location,
        "period": food.period,
        "expiry_date": food.expiry_date.isoformat(),
        "email": food.email,
        "added_date": food.added_date.isoformat(),
        "reminder_sent": food.reminder_sent,
    }


def _serialize_row(row: FoodRow) -> dict[str, object]:
    return {
        **_serialize_food(row.food),
        "remaining_days": row.remaining_days,
        "severity": row.severity,
        "status_text": row.status_text,
    }


def _serialize_reference(reference: ReferenceEntry) -> dict[str, object]:
    return {
        "id": reference.id,
        "name": reference.name,
        "period": reference.period,
        "location": reference.location,
    }
