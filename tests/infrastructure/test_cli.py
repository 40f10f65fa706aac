"""End-to-end tests for the click CLI against a JSON store."""

import pytest
from click.testing import CliRunner

from storeops.infrastructure.cli.main import cli


@pytest.fixture
def invoke(tmp_path, monkeypatch):
    for name in ("STOREOPS_INVOICE_PREFIX", "STOREOPS_ORDER_PREFIX", "STOREOPS_DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)
    runner = CliRunner()
    env = {
        "STOREOPS_BACKEND": "json",
        "STOREOPS_DATA_FILE": str(tmp_path / "store.json"),
        "STOREOPS_ATOMIC_CONFIRMATION": "true",
        "STOREOPS_LOG_LEVEL": "WARNING",
    }

    def _invoke(*args: str):
        return runner.invoke(cli, list(args), env=env)

    _invoke("product", "add", "--name", "Widget", "--price", "15.00", "--stock", "10")
    _invoke("product", "add", "--name", "Gadget", "--price", "25.00", "--stock", "3")
    return _invoke


class TestProductCommands:

    def test_list(self, invoke):
        result = invoke("product", "list")
        assert result.exit_code == 0
        assert "Widget" in result.output
        assert "15.00 BDT" in result.output

    def test_duplicate_rejected(self, invoke):
        result = invoke("product", "add", "--name", "Widget", "--price", "1")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_set_and_show_inventory(self, invoke):
        assert invoke("inventory", "set", "--product", "Gadget", "--quantity", "40").exit_code == 0
        result = invoke("inventory", "show")
        assert "40" in result.output


class TestInvoiceCommands:

    def test_pos_sale_and_return(self, invoke):
        result = invoke("invoice", "create", "--customer", "Walk-in", "--items", "Widget:4")
        assert result.exit_code == 0, result.output
        assert "Invoice #1" in result.output
        assert "60.00 BDT" in result.output

        result = invoke("invoice", "return", "--id", "1")
        assert result.exit_code == 0
        assert "returned, stock restored" in result.output

        result = invoke("invoice", "return", "--id", "1")
        assert result.exit_code == 1
        assert "already returned" in result.output

    def test_insufficient_stock(self, invoke):
        result = invoke("invoice", "create", "--customer", "Walk-in", "--items", "Gadget:5")
        assert result.exit_code == 1
        assert "Insufficient stock for product: Gadget" in result.output
        assert "No invoices found." in invoke("invoice", "list").output

    def test_needs_items_or_order(self, invoke):
        result = invoke("invoice", "create", "--customer", "Walk-in")
        assert result.exit_code == 2

    def test_bad_items_format(self, invoke):
        result = invoke("invoice", "create", "--customer", "Walk-in", "--items", "Widget")
        assert result.exit_code == 2
        assert "Expected 'ProductName:Quantity'" in result.output

    def test_next_number(self, invoke):
        result = invoke("invoice", "next-number")
        assert result.exit_code == 0
        assert result.output.strip().startswith("INV-")
        assert result.output.strip().endswith("-00001")


class TestOrderCommands:

    def _create(self, invoke, items: str = "Widget:2"):
        return invoke(
            "order", "create",
            "--customer", "Alice", "--phone", "01700000000",
            "--address", "Banani, Dhaka", "--items", items, "--location", "outside",
        )

    def test_create_and_show(self, invoke):
        result = self._create(invoke)
        assert result.exit_code == 0, result.output
        assert "status=pending" in result.output
        assert "150.00 BDT" in result.output

        result = invoke("order", "show", "--id", "1")
        assert "Alice" in result.output
        assert "Delivery" in result.output

    def test_confirm_then_invoice(self, invoke):
        self._create(invoke)
        result = invoke("order", "status", "--id", "1", "--status", "confirmed")
        assert result.exit_code == 0
        assert "stock reduced" in result.output

        result = invoke("invoice", "create", "--order", "1", "--payment", "card")
        assert result.exit_code == 0, result.output
        assert "Invoice #2" in result.output

        result = invoke("invoice", "create", "--order", "1")
        assert result.exit_code == 1
        assert "already invoiced" in result.output

    def test_order_invoice_rejects_delivery_charge(self, invoke):
        self._create(invoke)
        invoke("order", "status", "--id", "1", "--status", "confirmed")
        result = invoke("invoice", "create", "--order", "1", "--delivery-charge", "10")
        assert result.exit_code == 2
        assert "--delivery-charge cannot be used with --order" in result.output
        assert "No invoices found." in invoke("invoice", "list").output

    def test_confirm_short_order_fails(self, invoke):
        self._create(invoke, items="Gadget:4")
        result = invoke("order", "status", "--id", "1", "--status", "confirmed")
        assert result.exit_code == 1
        assert "Insufficient stock" in result.output
        assert "pending" in invoke("order", "list").output

    def test_unknown_order(self, invoke):
        result = invoke("order", "show", "--id", "9")
        assert result.exit_code == 1
        assert "Order #9 not found" in result.output


class TestRootOptions:

    def test_bad_configuration(self):
        result = CliRunner().invoke(cli, ["product", "list"], env={"STOREOPS_BACKEND": "mongo"})
        assert result.exit_code == 1
        assert "STOREOPS_BACKEND must be one of" in result.output

    def test_help_does_not_open_store(self, tmp_path):
        result = CliRunner().invoke(
            cli, ["--help"], env={"STOREOPS_DATA_FILE": str(tmp_path / "x.json")}
        )
        assert result.exit_code == 0
        assert not (tmp_path / "x.json").exists()
