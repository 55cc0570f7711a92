import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)

# --- Константы и базовые настройки ---
BASE_URL = f"{settings.NOCODB_URL}/api/v2/tables"
HEADERS = {
    "xc-token": settings.NOCODB_API_TOKEN
}
REQUEST_TIMEOUT = 10.0
PAGE_SIZE = 1000


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=REQUEST_TIMEOUT)


# --- Базовые операции над таблицами ---

async def _list_records(table_id: str, sort: str | None = None) -> list:
    """
    Получает все записи таблицы, постранично (offset + pageInfo.isLastPage).
    При ошибке возвращает пустой список.
    """
    request_url = f"{BASE_URL}/{table_id}/records"
    records = []
    offset = 0

    async with _client() as client:
        try:
            while True:
                params = {"limit": PAGE_SIZE, "offset": offset}
                if sort:
                    params["sort"] = sort

                response = await client.get(request_url, headers=HEADERS, params=params)
                response.raise_for_status()
                data = response.json()
                page = data.get("list", [])
                records.extend(page)

                if not page or data.get("pageInfo", {}).get("isLastPage", True):
                    return records
                offset += len(page)
        except httpx.HTTPError as e:
            logger.error(f"Ошибка при запросе к NocoDB (таблица {table_id}): {e}")
            return []


async def _get_record(table_id: str, record_id: str) -> dict | None:
    """Одна запись по Id. None, если записи нет или NocoDB ответила ошибкой."""
    request_url = f"{BASE_URL}/{table_id}/records/{record_id}"

    async with _client() as client:
        try:
            response = await client.get(request_url, headers=HEADERS)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response.json() or None
        except httpx.HTTPError as e:
            logger.error(f"Ошибка при получении записи {record_id} из {table_id}: {e}")
            return None


async def _create_record(table_id: str, data: dict) -> dict | None:
    request_url = f"{BASE_URL}/{table_id}/records"

    async with _client() as client:
        try:
            response = await client.post(request_url, headers=HEADERS, json=data)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Ошибка при создании записи в {table_id}: {e} | Тело ответа: {e.response.text}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Ошибка при создании записи в {table_id}: {e}")
            return None


async def _update_record(table_id: str, record_id: str, data: dict) -> dict | None:
    request_url = f"{BASE_URL}/{table_id}/records"

    async with _client() as client:
        try:
            response = await client.patch(request_url, headers=HEADERS, json={**data, "Id": record_id})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Ошибка при обновлении записи {record_id} в {table_id}: {e} | Тело ответа: {e.response.text}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Ошибка при обновлении записи {record_id} в {table_id}: {e}")
            return None


async def _delete_record(table_id: str, record_id: str) -> bool:
    request_url = f"{BASE_URL}/{table_id}/records"

    async with _client() as client:
        try:
            response = await client.request("DELETE", request_url, headers=HEADERS, json={"Id": record_id})
            response.raise_for_status()
            return True
        except httpx.HTTPStatusError as e:
            logger.error(f"Ошибка при удалении записи {record_id} из {table_id}: {e} | Тело ответа: {e.response.text}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Ошибка при удалении записи {record_id} из {table_id}: {e}")
            return False


# --- Бронирования ---

async def get_all_bookings() -> list:
    """Все брони, новые сверху."""
    return await _list_records(settings.BOOKINGS_TABLE_ID, sort="-createdAt")

async def get_booking_by_id(booking_id: str) -> dict | None:
    return await _get_record(settings.BOOKINGS_TABLE_ID, booking_id)

async def create_booking(booking_data: dict) -> dict | None:
    return await _create_record(settings.BOOKINGS_TABLE_ID, booking_data)

async def update_booking(booking_id: str, booking_data: dict) -> dict | None:
    return await _update_record(settings.BOOKINGS_TABLE_ID, booking_id, booking_data)

async def delete_booking_by_id(booking_id: str) -> bool:
    return await _delete_record(settings.BOOKINGS_TABLE_ID, booking_id)


# --- Клиенты ---

async def get_all_customers() -> list:
    """Все клиенты, по алфавиту."""
    return await _list_records(settings.CUSTOMERS_TABLE_ID, sort="name")

async def get_customer_by_id(customer_id: str) -> dict | None:
    return await _get_record(settings.CUSTOMERS_TABLE_ID, customer_id)

async def create_customer(customer_data: dict) -> dict | None:
    return await _create_record(settings.CUSTOMERS_TABLE_ID, customer_data)

async def update_customer(customer_id: str, customer_data: dict) -> dict | None:
    return await _update_record(settings.CUSTOMERS_TABLE_ID, customer_id, customer_data)

async def delete_customer_by_id(customer_id: str) -> bool:
    return await _delete_record(settings.CUSTOMERS_TABLE_ID, customer_id)


# --- Счета ---

async def get_all_invoices() -> list:
    """Все счета, по дате выставления (новые сверху)."""
    return await _list_records(settings.INVOICES_TABLE_ID, sort="-issueDate")

async def get_invoice_by_id(invoice_id: str) -> dict | None:
    return await _get_record(settings.INVOICES_TABLE_ID, invoice_id)

async def create_invoice(invoice_data: dict) -> dict | None:
    return await _create_record(settings.INVOICES_TABLE_ID, invoice_data)

async def update_invoice_status(invoice_id: str, status: str) -> dict | None:
    return await _update_record(settings.INVOICES_TABLE_ID, invoice_id, {"status": status})


# --- Настройки компании ---

async def get_company_settings() -> dict | None:
    """
    Реквизиты компании хранятся одной записью в таблице настроек.
    Если записи нет - возвращает None.
    """
    records = await _list_records(settings.SETTINGS_TABLE_ID)
    if records:
        return records[0]
    return None

async def save_company_settings(settings_data: dict) -> dict | None:
    existing = await get_company_settings()
    if existing and existing.get("Id") is not None:
        return await _update_record(settings.SETTINGS_TABLE_ID, existing["Id"], settings_data)
    return await _create_record(settings.SETTINGS_TABLE_ID, settings_data)
