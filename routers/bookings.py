import datetime
import logging

from fastapi import APIRouter, HTTPException

import booking_logic
import nocodb_client
import schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/bookings",
    tags=["Bookings"]
)


def current_time() -> datetime.datetime:
    """Текущее локальное время коворкинга (наивное, как и время броней)."""
    return datetime.datetime.now()


def _hourly_rate_of(customer: dict) -> float:
    try:
        return float(customer.get("hourlyRate") or 0)
    except (TypeError, ValueError):
        return 0.0
    except OverflowError:
        # Калькулятор отклонит такую ставку как некорректную
        return float("inf")


async def _get_customer_or_404(customer_id: str) -> dict:
    customer = await nocodb_client.get_customer_by_id(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


def _calculate_or_422(booking_date: str, start_time: str, end_time: str, hourly_rate: float) -> booking_logic.CalculationResult:
    result = booking_logic.calculate(booking_date, start_time, end_time, hourly_rate)
    if isinstance(result, booking_logic.ValidationFailure):
        logger.warning(f"⛔️ Некорректное время брони: {booking_date} {start_time}-{end_time} ({result.reason})")
        raise HTTPException(status_code=422, detail={"message": result.reason, "field": result.field})
    return result


async def _prepare_booking_record(data: schemas.BookingCreate) -> dict:
    """
    Пересчитывает часы и стоимость на сервере по актуальной ставке клиента.
    Значения, присланные формой, не используются.
    """
    customer = await _get_customer_or_404(data.customer_id)
    result = _calculate_or_422(data.booking_date, data.start_time, data.end_time, _hourly_rate_of(customer))

    return {
        "customerId": data.customer_id,
        "customerName": customer.get("name", ""),
        "bookingDate": data.booking_date,
        "startTime": data.start_time,
        "endTime": data.end_time,
        "hours": result.hours,
        "cost": result.cost,
        "notes": data.notes or "",
    }


@router.post("/quote")
async def quote_booking(data: schemas.BookingQuoteRequest):
    """
    Предварительный расчёт: сколько часов и сколько это стоит.
    Форма вызывает его при каждом изменении даты/времени.
    """
    if data.customer_id:
        customer = await _get_customer_or_404(data.customer_id)
        hourly_rate = _hourly_rate_of(customer)
    elif data.hourly_rate is not None:
        hourly_rate = data.hourly_rate
    else:
        raise HTTPException(status_code=400, detail="Either customer_id or hourly_rate is required")

    result = _calculate_or_422(data.booking_date, data.start_time, data.end_time, hourly_rate)
    return {"hours": result.hours, "cost": result.cost}


@router.get("")
async def list_bookings():
    """
    Все брони (новые сверху) со статусом past / ongoing / future / unknown.
    Время "сейчас" берётся один раз на весь список.
    """
    bookings = await nocodb_client.get_all_bookings()
    now = current_time()

    enriched = []
    for booking in bookings:
        status = booking_logic.classify(
            booking.get("bookingDate"), booking.get("startTime"), booking.get("endTime"), now
        )
        enriched.append({**booking, "status": status.value})

    return enriched


@router.post("", status_code=201)
async def create_booking(data: schemas.BookingCreate):
    logger.info(f"🚀 Создание брони. Клиент: {data.customer_id}. Данные: {data.model_dump()}")

    record = await _prepare_booking_record(data)
    record["createdAt"] = datetime.datetime.now(datetime.timezone.utc).isoformat()

    new_booking = await nocodb_client.create_booking(record)
    if not new_booking:
        logger.error("❌ NocoDB вернула пустой ответ или ошибку при создании брони.")
        raise HTTPException(status_code=502, detail="Error saving booking data")

    logger.info(f"✅ Бронь создана! ID: {new_booking.get('Id')}, {record['hours']} ч., {record['cost']}")

    return {
        "message": "Booking received successfully!",
        "booking_id": new_booking.get("Id"),
        "hours": record["hours"],
        "cost": record["cost"],
    }


@router.put("/{booking_id}")
async def update_booking(booking_id: str, data: schemas.BookingCreate):
    existing = await nocodb_client.get_booking_by_id(booking_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Booking not found")

    record = await _prepare_booking_record(data)

    updated = await nocodb_client.update_booking(booking_id, record)
    if not updated:
        raise HTTPException(status_code=502, detail="Error updating booking")

    logger.info(f"✏️ Бронь {booking_id} обновлена")
    return {**existing, **record, "Id": existing.get("Id", booking_id)}


@router.delete("/{booking_id}")
async def delete_booking(booking_id: str):
    existing = await nocodb_client.get_booking_by_id(booking_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Booking not found")

    success = await nocodb_client.delete_booking_by_id(booking_id)
    if not success:
        raise HTTPException(status_code=502, detail="Error deleting booking")

    return {"message": "Booking deleted successfully"}
