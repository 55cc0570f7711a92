import datetime

INVOICE_STATUSES = ("draft", "sent", "paid", "overdue", "cancelled")

# Реквизиты по умолчанию, если в таблице настроек ещё ничего нет
DEFAULT_COMPANY_SETTINGS = {
    "companyName": "The Workplace",
    "companyAddress": "123 Main Street, Anytown, USA",
    "companyContact": "contact@theworkplace.com | (555) 123-4567",
    "paymentInstructions": "Please make payments to Workplace Bank, Account #123456789.",
}


def make_invoice_number(issue_date: datetime.date, booking_id) -> str:
    return f"INV-{issue_date.strftime('%Y%m%d')}-{booking_id}"


def build_invoice(booking: dict, customer: dict, issue_date: datetime.date, due_days: int) -> dict:
    """
    Собирает счёт по одной брони: одна позиция, количество = часы,
    цена = ставка клиента, сумма = стоимость брони.
    Суммы округляются до копеек только здесь, в самом счёте.
    """
    hours = float(booking.get("hours") or 0)
    cost = float(booking.get("cost") or 0)
    unit_price = float(customer.get("hourlyRate") or 0)

    description = (
        f"Workspace booking {booking.get('bookingDate')} "
        f"{booking.get('startTime')}-{booking.get('endTime')}"
    )

    items = [{
        "description": description,
        "quantity": round(hours, 2),
        "unitPrice": round(unit_price, 2),
        "total": round(cost, 2),
    }]

    return {
        "bookingId": str(booking.get("Id")),
        "customerId": str(customer.get("Id")),
        "customerName": customer.get("name") or "N/A",
        "invoiceNumber": make_invoice_number(issue_date, booking.get("Id")),
        "issueDate": issue_date.isoformat(),
        "dueDate": (issue_date + datetime.timedelta(days=due_days)).isoformat(),
        "amount": round(sum(item["total"] for item in items), 2),
        "status": "draft",
        "items": items,
    }


def merge_company_settings(stored: dict | None) -> dict:
    """Сохранённые реквизиты поверх значений по умолчанию (пустые поля игнорируются)."""
    merged = dict(DEFAULT_COMPANY_SETTINGS)
    if stored:
        for key in DEFAULT_COMPANY_SETTINGS:
            if stored.get(key):
                merged[key] = stored[key]
    return merged
