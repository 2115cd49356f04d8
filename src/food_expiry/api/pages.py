"""Server-rendered HTML for the inventory page."""

import json
from html import escape

from food_expiry.domain.inventory import FoodNameOption, FoodRow, ReferenceEntry

EMPTY_FOODS_HTML = '<div class="empty-state">No items registered yet</div>'


def render_food_items(rows: list[FoodRow]) -> str:
    """Render the food list, or the placeholder when there is nothing to show."""
    if not rows:
        return EMPTY_FOODS_HTML
    return "".join(_render_food_row(row) for row in rows)


def _render_food_row(row: FoodRow) -> str:
    food = row.food
    return f"""
      <div class="food-item">
        <span>{escape(food.name)}</span>
        <span>{escape(food.location)}</span>
        <span>{food.period}d</span>
        <span>{food.expiry_date.isoformat()}</span>
        <span class="days-remaining {row.severity}">{escape(row.status_text)}</span>
        <form method="post" action="/foods/{escape(food.id)}/delete"
              onsubmit="return confirm('Delete this item?')">
          <input type="hidden" name="confirmed" value="true" />
          <button class="delete-btn">Delete</button>
        </form>
      </div>"""


def render_reference_items(references: list[ReferenceEntry]) -> str:
    """Render the reference list in insertion order."""
    return "".join(
        f"""
      <div class="reference-item">
        <span>{escape(ref.name)}</span>
        <span>{escape(ref.location)}</span>
        <span>{escape(ref.period)}</span>
        <form method="post" action="/references/{escape(ref.id)}/delete"
              onsubmit="return confirm('Delete this reference?')">
          <input type="hidden" name="confirmed" value="true" />
          <button class="delete-reference-btn">Delete</button>
        </form>
      </div>"""
        for ref in references
    )


def render_food_name_options(options: list[FoodNameOption]) -> str:
    """Render the options of the food-name select."""
    return "".join(
        f'<option value="{escape(option.value)}"'
        f'{" selected" if option.selected else ""}>{escape(option.label)}</option>'
        for option in options
    )


def render_index_page(
    rows: list[FoodRow],
    references: list[ReferenceEntry],
    options: list[FoodNameOption],
    email: str = "",
    alert: str | None = None,
    form_values: dict[str, str] | None = None,
    reference_values: dict[str, str] | None = None,
) -> str:
    """Render the full inventory page.

    ``form_values`` and ``reference_values`` refill the add forms after a
    rejected submission.
    """
    food_form = form_values or {}
    reference_form = reference_values or {}
    alert_script = f"<script>alert({json.dumps(alert)});</script>" if alert else ""
    return _INDEX_HTML.format(
        food_name_options=render_food_name_options(options),
        email=escape(email),
        location=escape(food_form.get("location", "")),
        period=escape(food_form.get("period", "")),
        expiry_date=escape(food_form.get("expiry_date", "")),
        reference_name=escape(reference_form.get("name", "")),
        reference_location=escape(reference_form.get("location", "")),
        reference_period=escape(reference_form.get("period", "")),
        food_items=render_food_items(rows),
        reference_items=render_reference_items(references),
        alert_script=alert_script,
    )


_INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Food Expiry Tracker</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }}
      .card {{ padding: 1rem; margin-bottom: 1rem; border: 1px solid #eee; }}
      .row {{ margin-bottom: 0.5rem; }}
      input, select {{ padding: 0.4rem 0.6rem; }}
      .food-item, .reference-item {{ display: flex; gap: 1rem; padding: 0.4rem 0; }}
      .food-item form, .reference-item form {{ margin: 0; }}
      .days-remaining.expired {{ color: #b00020; font-weight: bold; }}
      .days-remaining.warning {{ color: #b26a00; font-weight: bold; }}
      .days-remaining.safe {{ color: #1b7a2f; }}
      .empty-state {{ color: #777; }}
    </style>
  </head>
  <body>
    <h1>Food Expiry Tracker</h1>
    <div class="card">
      <h3>Add food</h3>
      <form method="post" action="/foods">
        <div class="row">
          <select id="foodName" name="name">{food_name_options}</select>
          <input id="storageLocation" name="location" value="{location}"
                 placeholder="Location" />
          <input id="storagePeriod" name="period" type="number" min="1"
                 value="{period}" placeholder="Days" />
          <input id="expiryDate" name="expiry_date" type="date"
                 value="{expiry_date}" />
          <input id="userEmail" name="email" type="email" value="{email}"
                 placeholder="Email for reminders" />
          <button id="addBtn">Add</button>
        </div>
      </form>
      <div id="foodItems">{food_items}</div>
    </div>
    <div class="card">
      <h3>Storage guide</h3>
      <form method="post" action="/references">
        <div class="row">
          <input id="referenceName" name="name" value="{reference_name}"
                 placeholder="Food name" />
          <input id="referencePeriod" name="period" value="{reference_period}"
                 placeholder="e.g. 2 weeks" />
          <input id="referenceLocation" name="location"
                 value="{reference_location}" placeholder="Location" />
          <button id="addReferenceBtn">Add</button>
        </div>
      </form>
      <div id="referenceItems">{reference_items}</div>
    </div>
    <script>
      const nameSelect = document.getElementById('foodName');
      const locationInput = document.getElementById('storageLocation');
      const periodInput = document.getElementById('storagePeriod');
      const expiryInput = document.getElementById('expiryDate');

      async function refreshExpiryDate() {{
        const period = parseInt(periodInput.value);
        if (!(period > 0)) return;
        const res = await fetch('/api/expiry-date?period=' + period);
        if (!res.ok) return;
        const data = await res.json();
        if (data.expiry_date) expiryInput.value = data.expiry_date;
      }}

      nameSelect.addEventListener('change', async () => {{
        if (!nameSelect.value) return;
        const res = await fetch(
          '/api/references/autofill?name=' + encodeURIComponent(nameSelect.value)
        );
        if (!res.ok) return;
        const data = await res.json();
        locationInput.value = data.location;
        periodInput.value = data.period_days;
        if (data.expiry_date) expiryInput.value = data.expiry_date;
      }});
      periodInput.addEventListener('input', refreshExpiryDate);
    </script>
    {alert_script}
  </body>
</html>
"""
