"""Dashboard Controller - collection tiles with live record counts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Type

import flet as ft

from vetria.app.ui.theme import BG_CARD, BORDER_SUBTLE, TEXT_LABEL, TEXT_MUTED, TEXT_TITLE
from vetria.shared.domain.catalog import CATALOG
from vetria.shared.domain.records import BaseRecord, collection_key

if TYPE_CHECKING:
    from vetria.app.state.app_state import AppState

logger = logging.getLogger(__name__)


class DashboardController:
    """Factory dashboard: one tile per collection."""

    def __init__(
        self,
        app_state: AppState,
        page: ft.Page,
        title: str,
        on_open: Callable[[Type[BaseRecord]], None],
    ):
        self.app_state = app_state
        self.page = page
        self.title = title
        self.on_open = on_open

    def build_view(self) -> ft.Control:
        counts = self.app_state.store.counts()
        tiles: List[ft.Control] = []
        for record_type, spec in CATALOG.items():
            count = counts[collection_key(record_type)]
            tiles.append(self._build_tile(record_type, spec.title, spec.subtitle, spec.icon, spec.color, count))

        logger.debug(f"Dashboard built with counts {counts}")
        return ft.Container(
            padding=20,
            expand=True,
            content=ft.Column(
                [
                    ft.Text(self.title, size=28, weight=ft.FontWeight.W_700, color=TEXT_TITLE),
                    ft.Text("Factory dashboard", size=13, color=TEXT_MUTED),
                    ft.Container(height=12),
                    ft.ResponsiveRow(tiles, spacing=16, run_spacing=16),
                ],
                spacing=6,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
        )

    def _build_tile(
        self,
        record_type: Type[BaseRecord],
        title: str,
        subtitle: str,
        icon: str,
        color: str,
        count: int,
    ) -> ft.Control:
        return ft.Container(
            col={"xs": 12, "sm": 6},
            padding=16,
            border_radius=12,
            bgcolor=BG_CARD,
            border=ft.border.all(1, BORDER_SUBTLE),
            ink=True,
            on_click=lambda e: self.on_open(record_type),
            content=ft.Row(
                [
                    ft.Icon(getattr(ft.Icons, icon, ft.Icons.CIRCLE), color=color, size=36),
                    ft.Column(
                        [
                            ft.Text(title, size=16, weight=ft.FontWeight.W_600, color=TEXT_TITLE),
                            ft.Text(str(count), size=26, weight=ft.FontWeight.W_700, color=color),
                            ft.Text(subtitle, size=12, color=TEXT_LABEL),
                        ],
                        spacing=2,
                    ),
                ],
                spacing=16,
            ),
        )
