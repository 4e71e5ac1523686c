"""
Tests para inventory.py y notifications.py.
"""

import pytest
from pydantic import ValidationError

from agroforms.inventory import available_items, check_stock, stock_level
from agroforms.models import StockItem
from agroforms.notifications import Notification, NotificationLog, Severity


@pytest.fixture
def items():
    return [
        StockItem(name="Urea", quantity=20, unit="kg", status="In Stock"),
        StockItem(name="Urea", quantity=10, unit="kg", status="in stock"),
        StockItem(name="Urea", quantity=50, unit="kg", status="Expired"),
        StockItem(name="Urea", quantity=5, unit="kg", status="out of stock"),
        StockItem(name="Glyphosate", quantity=0, unit="l", status="Out Of Stock"),
    ]


class TestStockLevel:
    """Tests para el cálculo de stock."""

    def test_excludes_unavailable(self, items):
        assert len(available_items(items, "Urea")) == 2

    def test_total(self, items):
        level = stock_level(items, "Urea")
        assert level.total == 30
        assert level.unit == "kg"
        assert not level.depleted

    def test_unknown_item(self, items):
        level = stock_level(items, "Potash")
        assert level.total == 0
        assert level.unit is None
        assert level.depleted


class TestCheckStock:
    """Tests para las alertas de stock."""

    def test_available(self, items, notifications):
        check_stock(items, "Urea", notifications)

        assert notifications.last.severity == Severity.SUCCESS
        assert notifications.last.title == "Stock Level"
        assert notifications.last.message == "Total quantity for Urea is 30 kg."

    def test_depleted(self, items, notifications):
        level = check_stock(items, "Glyphosate", notifications)

        assert level.depleted
        assert notifications.last.severity == Severity.WARNING
        assert notifications.last.title == "Low Stock Alert"
        assert "Glyphosate" in notifications.last.message


class TestNotifications:
    """Tests para Notification y NotificationLog."""

    def test_title_required(self):
        with pytest.raises(ValidationError):
            Notification(severity=Severity.ERROR, title="")

    def test_severity_from_string(self):
        assert Notification(severity="warning", title="Careful").severity == Severity.WARNING

    def test_log(self):
        log = NotificationLog()
        log.notify(Notification(severity=Severity.SUCCESS, title="Ok"))
        log.notify(Notification(severity=Severity.ERROR, title="Error", message="boom"))

        assert len(log) == 2
        assert [n.title for n in log.by_severity(Severity.ERROR)] == ["Error"]
        log.clear()
        assert len(log) == 0


class TestStockItem:
    """Tests para el modelo StockItem."""

    def test_negative_quantity(self):
        with pytest.raises(ValidationError):
            StockItem(name="Urea", quantity=-1)
