import datetime
import logging

from fastapi import APIRouter, HTTPException

import invoice_logic
import nocodb_client
import schemas
from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/invoices",
    tags=["Invoices"]
)


@router.get("")
async def list_invoices():
    return await nocodb_client.get_all_invoices()


@router.get("/{invoice_id}")
async def get_invoice(invoice_id: str):
    invoice = await nocodb_client.get_invoice_by_id(invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.post("/from-booking/{booking_id}", status_code=201)
async def create_invoice_from_booking(booking_id: str):
    """
    Выставляет счёт по брони. Сумма берётся из брони как есть,
    ставка - из карточки клиента.
    """
    booking = await nocodb_client.get_booking_by_id(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    customer = await nocodb_client.get_customer_by_id(str(booking.get("customerId")))
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    invoice = invoice_logic.build_invoice(
        booking, customer, datetime.date.today(), settings.INVOICE_DUE_DAYS
    )
    invoice["createdAt"] = datetime.datetime.now(datetime.timezone.utc).isoformat()

    created = await nocodb_client.create_invoice(invoice)
    if not created:
        logger.error(f"❌ Не удалось сохранить счёт по брони {booking_id}")
        raise HTTPException(status_code=502, detail="Error saving invoice")

    logger.info(f"🧾 Счёт {invoice['invoiceNumber']} на сумму {invoice['amount']} создан")
    return {**invoice, "Id": created.get("Id")}


@router.put("/{invoice_id}/status")
async def update_invoice_status(invoice_id: str, data: schemas.InvoiceStatusUpdate):
    existing = await nocodb_client.get_invoice_by_id(invoice_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Invoice not found")

    updated = await nocodb_client.update_invoice_status(invoice_id, data.status)
    if not updated:
        raise HTTPException(status_code=502, detail="Error updating invoice")

    return {"message": "Invoice status updated.", "status": data.status}
