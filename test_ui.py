"""Tests for the Flet screens that run without a live page session."""

from types import SimpleNamespace

import pytest

from vetria.app.controllers import DashboardController, RecordsController
from vetria.app.state import AppState
from vetria.app.ui import theme
from vetria.app.ui.layouts.shell import build_shell
from vetria.shared.core import events
from vetria.shared.core.configuration import StorageConfig, SystemConfig, UIConfig
from vetria.shared.domain.records import OrderRecord


class FakePage(SimpleNamespace):
    def __init__(self):
        super().__init__(updates=0)

    def update(self):
        self.updates += 1


class CountingStore:
    def __init__(self, counts):
        self._counts = counts
        self.calls = 0

    def counts(self):
        self.calls += 1
        return dict(self._counts)


def test_warning_logs_use_amber():
    assert theme.get_log_color("warning") == theme.AMBER_PRIMARY == "#F5B041"
    assert theme.get_log_color("unknown") == theme.LOG_INFO
    assert not hasattr(theme, "GOLD_PRIMARY")


def test_dashboard_counts_store_once_per_build():
    store = CountingStore({"processes": 1, "materials": 2, "tasks": 3, "orders": 4, "deliveries": 5})
    controller = DashboardController(SimpleNamespace(store=store), FakePage(), "Stylish Glass", on_open=lambda t: None)

    view = controller.build_view()

    assert store.calls == 1
    tiles = view.content.controls[-1].controls
    shown = [tile.content.controls[1].controls[1].value for tile in tiles]
    assert shown == ["1", "2", "3", "4", "5"]


def test_order_add_screen_starts_from_defaults():
    page = FakePage()
    store = SimpleNamespace(records=lambda record_type: ())
    controller = RecordsController(SimpleNamespace(store=store), page, OrderRecord, on_back=lambda: None)

    controller._show_add_screen()

    assert controller._inputs["status"].value == "New"
    assert controller._inputs["payment_method"].value == "Bank Transfer"
    assert controller._inputs["refund_eligible"].value is True
    assert controller._inputs["tax_percent"].value == "10.0"
    assert controller._inputs["tags"].value == "client,new"
    assert controller._form_total() == 0.0

    controller._inputs["quantity"].value = "50"
    controller._inputs["unit_price"].value = "25"
    assert controller._form_total() == pytest.approx(1375.0)

    controller._inputs["shipping_cost"].value = "inf"
    assert controller._form_total() == pytest.approx(1375.0)


@pytest.mark.asyncio
async def test_shell_listens_only_to_gate_store_and_log_topics(tmp_path):
    config = SystemConfig(storage=StorageConfig(db_path=str(tmp_path / "vetria.duckdb")))
    app_state = AppState.from_config(config)

    await build_shell(FakePage(), app_state, UIConfig())

    for topic in (events.TOPIC_ACCESS_STATE, events.TOPIC_STORE_LOADED, events.TOPIC_LOGS_EVENT):
        assert app_state.bus.subscriber_count(topic) == 1
    for topic in (events.TOPIC_RECORD_ADDED, events.TOPIC_RECORD_DELETED):
        assert app_state.bus.subscriber_count(topic) == 0
    app_state.close()
