import datetime
import logging

from fastapi import APIRouter, HTTPException

import nocodb_client
import schemas

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/customers",
    tags=["Customers"]
)


def _customer_record(data: schemas.CustomerCreate) -> dict:
    return {
        "name": data.name,
        "email": data.email,
        "phone": data.phone or None,
        "company": data.company or None,
        "hourlyRate": data.hourly_rate,
        "gender": data.gender,
    }


@router.get("")
async def list_customers():
    """Справочник клиентов, по алфавиту."""
    return await nocodb_client.get_all_customers()


@router.get("/{customer_id}")
async def get_customer(customer_id: str):
    customer = await nocodb_client.get_customer_by_id(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.post("", status_code=201)
async def create_customer(data: schemas.CustomerCreate):
    record = _customer_record(data)
    record["createdAt"] = datetime.datetime.now(datetime.timezone.utc).isoformat()

    created = await nocodb_client.create_customer(record)
    if not created:
        raise HTTPException(status_code=502, detail="Error adding customer")

    logger.info(f"👤 Новый клиент: {data.name} (ID: {created.get('Id')}, ставка {data.hourly_rate})")
    return {**record, "Id": created.get("Id")}


@router.put("/{customer_id}")
async def update_customer(customer_id: str, data: schemas.CustomerCreate):
    existing = await nocodb_client.get_customer_by_id(customer_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Customer not found")

    record = _customer_record(data)
    updated = await nocodb_client.update_customer(customer_id, record)
    if not updated:
        raise HTTPException(status_code=502, detail="Error updating customer")

    return {**existing, **record}


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str):
    existing = await nocodb_client.get_customer_by_id(customer_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Customer not found")

    success = await nocodb_client.delete_customer_by_id(customer_id)
    if not success:
        raise HTTPException(status_code=502, detail="Error deleting customer")

    return {"message": "Customer deleted successfully"}
