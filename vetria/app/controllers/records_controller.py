"""Records Controller - list, detail and add screens for one collection.

The same controller drives all five collections; what differs between them
(labels, icons, input kinds, search fields) comes from the field catalog.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Type

import flet as ft

from vetria.app.ui.theme import (
    BG_CARD,
    BORDER_DIVIDER,
    BORDER_SUBTLE,
    RED_PRIMARY,
    TEAL_PRIMARY,
    TEXT_LABEL,
    TEXT_PLACEHOLDER,
    TEXT_TITLE,
    TEXT_VALUE,
)
from vetria.shared.domain.catalog import (
    FieldSpec,
    collection_spec,
    display_value,
    initial_form_values,
    input_fields,
)
from vetria.shared.domain.forms import FORM_BUILDERS, FormValidationError
from vetria.shared.domain.records import BaseRecord, OrderRecord, compute_order_total
from vetria.shared.domain.search import filter_records

if TYPE_CHECKING:
    from vetria.app.state.app_state import AppState

logger = logging.getLogger(__name__)


def _icon(name: str):
    return getattr(ft.Icons, name, ft.Icons.CIRCLE)


class RecordsController:
    """Controller for one record collection."""

    def __init__(
        self,
        app_state: AppState,
        page: ft.Page,
        record_type: Type[BaseRecord],
        on_back: Callable[[], None],
    ):
        self.app_state = app_state
        self.page = page
        self.record_type = record_type
        self.spec = collection_spec(record_type)
        self.on_back = on_back

        self._search_text = ""
        self._body = ft.Container(expand=True)
        self._list_column = ft.Column(spacing=8, scroll=ft.ScrollMode.AUTO, expand=True)
        self._inputs: Dict[str, ft.Control] = {}

    # =========================================================================
    # LIST
    # =========================================================================

    def build_view(self) -> ft.Control:
        self._body.content = self._build_list_screen()
        return self._body

    def _build_list_screen(self) -> ft.Control:
        search = ft.TextField(
            hint_text=f"Search {self.spec.title.lower()}",
            prefix_icon=ft.Icons.SEARCH,
            value=self._search_text,
            on_change=self._on_search,
            dense=True,
        )
        self._refresh_list()

        return ft.Container(
            padding=20,
            expand=True,
            content=ft.Column(
                [
                    self._header(self.spec.title, on_back=lambda e: self.on_back(), action=ft.IconButton(
                        ft.Icons.ADD, tooltip=f"Add to {self.spec.title}", on_click=self._show_add_screen,
                    )),
                    search,
                    ft.Divider(color=BORDER_DIVIDER, height=10),
                    self._list_column,
                ],
                spacing=8,
                expand=True,
            ),
        )

    def _header(self, title: str, on_back, action: Optional[ft.Control] = None) -> ft.Control:
        controls = [
            ft.IconButton(ft.Icons.ARROW_BACK, on_click=on_back),
            ft.Icon(_icon(self.spec.icon), color=self.spec.color, size=28),
            ft.Text(title, size=24, weight=ft.FontWeight.W_700, color=TEXT_TITLE, expand=True),
        ]
        if action is not None:
            controls.append(action)
        return ft.Row(controls, spacing=12, vertical_alignment=ft.CrossAxisAlignment.CENTER)

    def _on_search(self, e) -> None:
        self._search_text = e.control.value or ""
        self._refresh_list()
        self.page.update()

    def _refresh_list(self) -> None:
        records = filter_records(
            self.record_type, self.app_state.store.records(self.record_type), self._search_text
        )
        if not records:
            message = (
                f"No {self.spec.title.lower()} have been added yet."
                if not self._search_text
                else f"No results found for '{self._search_text}'"
            )
            self._list_column.controls = [ft.Text(message, color=TEXT_PLACEHOLDER, italic=True)]
            return

        self._list_column.controls = [self._build_row(record) for record in records]

    def _build_row(self, record: BaseRecord) -> ft.Control:
        headline = display_value(record, self.spec.field(self.spec.headline_field))
        caption = display_value(record, self.spec.field(self.spec.caption_field))

        async def on_delete(e):
            await self.app_state.delete_record(self.record_type, record.id)
            await self.app_state.push_log(f"Deleted {headline}", "warning")
            self._refresh_list()
            self.page.update()

        return ft.Container(
            padding=12,
            border_radius=8,
            bgcolor=BG_CARD,
            border=ft.border.all(1, BORDER_SUBTLE),
            ink=True,
            on_click=lambda e: self._show_detail_screen(record),
            content=ft.Row(
                [
                    ft.Icon(_icon(self.spec.icon), color=self.spec.color),
                    ft.Column(
                        [
                            ft.Text(headline, size=16, weight=ft.FontWeight.W_600, color=TEXT_TITLE),
                            ft.Text(caption, size=12, color=TEXT_LABEL),
                        ],
                        spacing=2,
                        expand=True,
                    ),
                    ft.IconButton(ft.Icons.DELETE_OUTLINE, icon_color=RED_PRIMARY, tooltip="Delete", on_click=on_delete),
                ],
                spacing=12,
            ),
        )

    # =========================================================================
    # DETAIL
    # =========================================================================

    def _show_detail_screen(self, record: BaseRecord) -> None:
        rows = [
            ft.Row(
                [
                    ft.Icon(_icon(field.icon), color=self.spec.color, size=18),
                    ft.Text(field.label, color=TEXT_LABEL, size=13, width=180),
                    ft.Text(display_value(record, field), color=TEXT_VALUE, size=13, expand=True, selectable=True),
                ],
                spacing=10,
            )
            for field in self.spec.fields
        ]
        title = display_value(record, self.spec.field(self.spec.headline_field))
        self._body.content = ft.Container(
            padding=20,
            expand=True,
            content=ft.Column(
                [self._header(title, on_back=self._back_to_list), ft.Divider(color=BORDER_DIVIDER)] + rows,
                spacing=8,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
        )
        self.page.update()

    def _back_to_list(self, e=None) -> None:
        self._body.content = self._build_list_screen()
        self.page.update()

    # =========================================================================
    # ADD
    # =========================================================================

    def _build_input(self, field: FieldSpec, initial: Any) -> ft.Control:
        if field.kind == "bool":
            return ft.Switch(label=field.label, value=initial)
        if field.kind == "date":
            return ft.TextField(
                label=f"{field.label} (YYYY-MM-DD HH:MM)",
                value=initial.strftime("%Y-%m-%d %H:%M"),
                prefix_icon=_icon(field.icon),
            )
        keyboard = ft.KeyboardType.NUMBER if field.kind in ("int", "float") else ft.KeyboardType.TEXT
        hint = "Comma separated" if field.kind == "tags" else None
        return ft.TextField(
            label=field.label, value=initial, prefix_icon=_icon(field.icon), keyboard_type=keyboard, hint_text=hint,
        )

    def _show_add_screen(self, e=None) -> None:
        initial = initial_form_values(self.record_type, datetime.now())
        self._inputs = {
            field.name: self._build_input(field, initial[field.name]) for field in input_fields(self.record_type)
        }

        extra: list = []
        if self.record_type is OrderRecord:
            total_text = ft.Text("Calculated Total: 0.00", color=TEAL_PRIMARY, weight=ft.FontWeight.W_600)

            def recalc(ev=None):
                total_text.value = f"Calculated Total: {self._form_total():.2f}"
                self.page.update()

            for name in ("quantity", "unit_price", "discount_percent", "tax_percent", "shipping_cost"):
                self._inputs[name].on_change = recalc
            total_text.value = f"Calculated Total: {self._form_total():.2f}"
            extra.append(total_text)

        self._body.content = ft.Container(
            padding=20,
            expand=True,
            content=ft.Column(
                [
                    self._header(f"Add to {self.spec.title}", on_back=self._back_to_list),
                    ft.Divider(color=BORDER_DIVIDER),
                    *self._inputs.values(),
                    *extra,
                    ft.ElevatedButton("Save", icon=ft.Icons.SAVE, on_click=self._on_save),
                ],
                spacing=10,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
        )
        self.page.update()

    def _form_total(self) -> float:
        values = self._collect_form()

        def num(name: str) -> float:
            try:
                value = float(values.get(name) or 0)
            except ValueError:
                return 0.0
            return value if math.isfinite(value) else 0.0

        total = compute_order_total(
            num("quantity"), num("unit_price"), num("discount_percent"), num("tax_percent"), num("shipping_cost"),
        )
        return total if math.isfinite(total) else 0.0

    def _collect_form(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field in input_fields(self.record_type):
            control = self._inputs[field.name]
            value = control.value
            if field.kind == "date":
                try:
                    value = datetime.strptime((value or "").strip(), "%Y-%m-%d %H:%M")
                except ValueError:
                    value = None
            values[field.name] = value
        return values

    async def _on_save(self, e) -> None:
        builder = FORM_BUILDERS[self.record_type]
        try:
            record = builder(self._collect_form())
        except FormValidationError as exc:
            logger.info(f"Rejected {self.record_type.__name__} form: {exc.messages}")
            self._show_message("Validation Errors", exc.format(), RED_PRIMARY)
            return

        await self.app_state.add_record(record)
        headline = display_value(record, self.spec.field(self.spec.headline_field))
        await self.app_state.push_log(f"Added {headline}", "success")
        self._back_to_list()
        self._show_message("Saved", f"{headline} has been added.", TEAL_PRIMARY)

    def _show_message(self, title: str, message: str, color: str) -> None:
        def close_dialog(ev=None):
            dialog.open = False
            self.page.update()

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text(title, weight=ft.FontWeight.W_700, color=color),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=close_dialog)],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        if dialog not in self.page.overlay:
            self.page.overlay.append(dialog)
        dialog.open = True
        self.page.update()
