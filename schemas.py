from typing import Literal

from pydantic import BaseModel, Field


class BookingQuoteRequest(BaseModel):
    # Либо клиент из справочника, либо ставка напрямую
    customer_id: str | None = None
    hourly_rate: float | None = None
    booking_date: str   # "yyyy-MM-dd"
    start_time: str     # "HH:mm"
    end_time: str       # "HH:mm"


class BookingCreate(BaseModel):
    customer_id: str
    booking_date: str
    start_time: str
    end_time: str
    notes: str | None = ""


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str | None = None
    company: str | None = None
    hourly_rate: float = Field(ge=0)
    gender: Literal["male", "female", "unknown"] = "unknown"


class InvoiceStatusUpdate(BaseModel):
    status: Literal["draft", "sent", "paid", "overdue", "cancelled"]


class CompanySettings(BaseModel):
    companyName: str = Field(min_length=1)
    companyAddress: str = Field(min_length=1)
    companyContact: str = Field(min_length=1)
    paymentInstructions: str = Field(min_length=1)


class FeedbackAnalyzeRequest(BaseModel):
    feedback: str = Field(min_length=1)
