import os

os.environ.setdefault("NOCODB_URL", "http://nocodb.test")
os.environ.setdefault("NOCODB_API_TOKEN", "test-token")

import pytest
from fastapi.testclient import TestClient

import nocodb_client


class FakeStore:
    """In-memory NocoDB tables: table -> {Id: record}."""

    def __init__(self):
        self.tables = {"bookings": {}, "customers": {}, "invoices": {}, "settings": {}}
        self.fail_writes = False
        self._next_id = 1

    def add(self, table: str, record: dict) -> dict:
        record_id = self._next_id
        self._next_id += 1
        stored = {**record, "Id": record_id}
        self.tables[table][str(record_id)] = stored
        return stored

    def install(self, monkeypatch):
        def getter(table):
            async def get(record_id):
                return self.tables[table].get(str(record_id))
            return get

        def lister(table, sort_key=None, reverse=False):
            async def list_all():
                records = list(self.tables[table].values())
                if sort_key:
                    records.sort(key=lambda r: r.get(sort_key) or "", reverse=reverse)
                return records
            return list_all

        def creator(table):
            async def create(data):
                if self.fail_writes:
                    return None
                return {"Id": self.add(table, data)["Id"]}
            return create

        def updater(table):
            async def update(record_id, data):
                if self.fail_writes or str(record_id) not in self.tables[table]:
                    return None
                self.tables[table][str(record_id)].update(data)
                return {"Id": record_id}
            return update

        def deleter(table):
            async def delete(record_id):
                if self.fail_writes:
                    return False
                return self.tables[table].pop(str(record_id), None) is not None
            return delete

        async def update_invoice_status(invoice_id, status):
            return await updater("invoices")(invoice_id, {"status": status})

        async def get_company_settings():
            records = list(self.tables["settings"].values())
            return records[0] if records else None

        async def save_company_settings(data):
            if self.fail_writes:
                return None
            self.tables["settings"] = {}
            return {"Id": self.add("settings", data)["Id"]}

        patches = {
            "get_all_bookings": lister("bookings", "createdAt", reverse=True),
            "get_booking_by_id": getter("bookings"),
            "create_booking": creator("bookings"),
            "update_booking": updater("bookings"),
            "delete_booking_by_id": deleter("bookings"),
            "get_all_customers": lister("customers", "name"),
            "get_customer_by_id": getter("customers"),
            "create_customer": creator("customers"),
            "update_customer": updater("customers"),
            "delete_customer_by_id": deleter("customers"),
            "get_all_invoices": lister("invoices", "issueDate", reverse=True),
            "get_invoice_by_id": getter("invoices"),
            "create_invoice": creator("invoices"),
            "update_invoice_status": update_invoice_status,
            "get_company_settings": get_company_settings,
            "save_company_settings": save_company_settings,
        }
        for name, func in patches.items():
            monkeypatch.setattr(nocodb_client, name, func)


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    fake.install(monkeypatch)
    return fake


@pytest.fixture
def client(store):
    from main import app
    return TestClient(app)
