from __future__ import annotations

import inspect
import logging
from typing import Type

import flet as ft

from vetria.app.controllers import DashboardController, RecordsController
from vetria.app.state import AppState
from vetria.app.ui.theme import BG_PAGE, CYAN_PRIMARY, TEXT_LABEL, TEXT_MUTED, get_log_color
from vetria.shared.core import events
from vetria.shared.core.configuration import UIConfig
from vetria.shared.core.event_bus import EventPayload
from vetria.shared.domain.access import GateStatus
from vetria.shared.domain.records import BaseRecord

logger = logging.getLogger(__name__)


def apply_shell_theme(page: ft.Page, ui_config: UIConfig) -> None:
    """Apply a dark, high-contrast baseline theme."""
    page.theme = ft.Theme(
        color_scheme_seed=ui_config.seed_color,
        visual_density=ft.VisualDensity.COMFORTABLE,
        use_material3=True,
    )
    page.theme_mode = ft.ThemeMode.DARK if ui_config.theme_mode == "dark" else ft.ThemeMode.LIGHT
    page.bgcolor = BG_PAGE
    page.padding = 0


def _loader() -> ft.Control:
    return ft.Container(
        expand=True,
        bgcolor=BG_PAGE,
        alignment=ft.Alignment(0, 0),
        content=ft.ProgressRing(width=56, height=56, stroke_width=4, color="#FFFFFF"),
    )


async def _open_url(page: ft.Page, url: str) -> None:
    # launch_url is a coroutine on newer Flet releases
    result = page.launch_url(url)
    if inspect.isawaitable(result):
        await result


def _remote_content(page: ft.Page, destination: str) -> ft.Control:
    """Full-screen hand-off to the approved remote content."""

    async def reopen(e):
        await _open_url(page, destination)

    return ft.Container(
        expand=True,
        bgcolor=BG_PAGE,
        alignment=ft.Alignment(0, 0),
        content=ft.Column(
            [
                ft.Icon(ft.Icons.PUBLIC, color=CYAN_PRIMARY, size=48),
                ft.Text("Opening remote content...", color=TEXT_LABEL, size=14),
                ft.TextButton(destination, on_click=reopen),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            alignment=ft.MainAxisAlignment.CENTER,
            tight=True,
        ),
    )


async def build_shell(page: ft.Page, app_state: AppState, ui_config: UIConfig) -> ft.View:
    """Build the root view and wire it to access gate and store events.

    The root shows a loader until the gate reaches a terminal state, then
    either the remote content (exclusively) or the native dashboard.
    """
    apply_shell_theme(page, ui_config)

    content_container = ft.Container(expand=True, content=_loader())
    status_text = ft.Text("", size=11, color=TEXT_MUTED)

    def show_dashboard() -> None:
        content_container.content = dashboard_controller.build_view()
        page.update()

    def open_collection(record_type: Type[BaseRecord]) -> None:
        controller = RecordsController(app_state, page, record_type, on_back=show_dashboard)
        content_container.content = controller.build_view()
        page.update()

    dashboard_controller = DashboardController(app_state, page, ui_config.app_title, on_open=open_collection)

    def _safe_update() -> None:
        try:
            page.update()
        except RuntimeError:
            # Session destroyed, ignore update
            pass

    async def _on_access_state(payload: EventPayload) -> None:
        status = payload.get("status")
        logger.debug(f"Shell received access state {status}")
        if status == GateStatus.VALIDATING.value:
            content_container.content = _loader()
        elif status == GateStatus.APPROVED.value:
            content_container.content = _remote_content(page, payload["destination"])
            await _open_url(page, payload["destination"])
        _safe_update()

    async def _on_store_loaded(payload: EventPayload) -> None:
        show_dashboard()
        if payload.get("seeded"):
            await app_state.push_log("Loaded demonstration data", "info")

    async def _on_log(payload: EventPayload) -> None:
        status_text.value = payload.get("message", "")
        status_text.color = get_log_color(payload.get("level", "info"))
        _safe_update()

    await app_state.bus.subscribe(events.TOPIC_ACCESS_STATE, _on_access_state)
    await app_state.bus.subscribe(events.TOPIC_STORE_LOADED, _on_store_loaded)
    await app_state.bus.subscribe(events.TOPIC_LOGS_EVENT, _on_log)

    footer = ft.Container(
        padding=ft.padding.symmetric(horizontal=16, vertical=6),
        content=ft.Row([ft.Text("Vetria", color=TEXT_MUTED, size=11), status_text], spacing=12),
    )

    return ft.View(
        route="/",
        padding=0,
        bgcolor=BG_PAGE,
        controls=[ft.Column([content_container, footer], expand=True, spacing=0)],
    )
