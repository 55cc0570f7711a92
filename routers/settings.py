from fastapi import APIRouter, HTTPException

import invoice_logic
import nocodb_client
import schemas


router = APIRouter(
    prefix="/api/v1/settings",
    tags=["Settings"]
)


@router.get("")
async def get_settings():
    """Реквизиты компании для счетов. Если ничего не сохранено - значения по умолчанию."""
    stored = await nocodb_client.get_company_settings()
    return invoice_logic.merge_company_settings(stored)


@router.post("")
async def save_settings(data: schemas.CompanySettings):
    saved = await nocodb_client.save_company_settings(data.model_dump())
    if not saved:
        raise HTTPException(status_code=502, detail="Error saving settings")
    return data.model_dump()
