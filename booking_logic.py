import datetime
import math
import re
from dataclasses import dataclass
from enum import Enum

# --- КОНСТАНТЫ ---

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
# Колонки NocoDB типа Time отдают "HH:mm:ss"
STORED_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")

MSG_INVALID_DATETIME = "Invalid date/time."
MSG_END_BEFORE_START = "End time must be after start time."
MSG_INVALID_RATE = "Hourly rate must be a non-negative number."


class BookingStatus(str, Enum):
    PAST = "past"
    ONGOING = "ongoing"
    FUTURE = "future"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CalculationResult:
    hours: float
    cost: float


@dataclass(frozen=True)
class ValidationFailure:
    reason: str
    field: str | None = None


# --- ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ ---

def parse_booking_date(value: datetime.date | str | None) -> datetime.date | None:
    """Дата брони: объект date или строка 'yyyy-MM-dd'. None, если не парсится."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Unsupported date type: {type(value).__name__}")
    if not DATE_PATTERN.match(value):
        return None
    try:
        return datetime.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_time_of_day(value: datetime.time | str | None, allow_seconds: bool = False) -> datetime.time | None:
    """
    Время 'HH:mm' (00-23 / 00-59). Секунды всегда обнуляются.
    allow_seconds=True дополнительно принимает 'HH:mm:ss' (так время хранит NocoDB).
    """
    if value is None:
        return None
    if isinstance(value, datetime.time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise TypeError(f"Unsupported time type: {type(value).__name__}")
    pattern = STORED_TIME_PATTERN if allow_seconds else TIME_PATTERN
    match = pattern.match(value)
    if not match:
        return None
    return datetime.time(int(match.group(1)), int(match.group(2)))


def combine(date_value, time_value, allow_seconds: bool = False) -> datetime.datetime | None:
    """
    Склеивает дату и время в один "наивный" момент времени.
    Часовые пояса не учитываются: всё в локальном времени коворкинга.
    """
    booking_date = parse_booking_date(date_value)
    time_of_day = parse_time_of_day(time_value, allow_seconds=allow_seconds)
    if booking_date is None or time_of_day is None:
        return None
    return datetime.datetime.combine(booking_date, time_of_day)


def minutes_between(a: datetime.datetime, b: datetime.datetime) -> float:
    """Разница (b - a) в минутах, без округления."""
    return (b - a).total_seconds() / 60.0


# --- ОСНОВНЫЕ ЛОГИЧЕСКИЕ ФУНКЦИИ ---

def calculate(date_value, start_time, end_time, hourly_rate: float) -> CalculationResult | ValidationFailure:
    """
    Считает длительность брони в часах и её стоимость по ставке клиента.

    Args:
        date_value: Дата брони (date или 'yyyy-MM-dd').
        start_time: Время начала ('HH:mm').
        end_time: Время конца ('HH:mm'), строго позже начала в тот же день.
        hourly_rate: Ставка клиента в час, >= 0.

    Returns:
        CalculationResult(hours, cost) или ValidationFailure с причиной.
        Бронь через полночь не поддерживается и считается ошибкой.
    """
    if isinstance(hourly_rate, bool) or not isinstance(hourly_rate, (int, float)):
        raise TypeError(f"Unsupported rate type: {type(hourly_rate).__name__}")
    try:
        hourly_rate = float(hourly_rate)
    except OverflowError:
        return ValidationFailure(MSG_INVALID_RATE, field="hourly_rate")
    if not math.isfinite(hourly_rate) or hourly_rate < 0:
        return ValidationFailure(MSG_INVALID_RATE, field="hourly_rate")

    start_dt = combine(date_value, start_time)
    end_dt = combine(date_value, end_time)

    if start_dt is None or end_dt is None:
        return ValidationFailure(MSG_INVALID_DATETIME)

    if end_dt <= start_dt:
        return ValidationFailure(MSG_END_BEFORE_START, field="end_time")

    hours = minutes_between(start_dt, end_dt) / 60.0
    cost = hours * hourly_rate
    if not math.isfinite(cost):
        return ValidationFailure(MSG_INVALID_RATE, field="hourly_rate")
    return CalculationResult(hours=hours, cost=cost)


def classify(date_value, start_time, end_time, now: datetime.datetime) -> BookingStatus:
    """
    Определяет статус брони относительно момента now: past, ongoing, future.
    Если определить нельзя (кривые данные, начало ровно в now) - unknown.
    now должен быть "наивным", как и время броней; с часовым поясом - тоже unknown.
    Время из NocoDB может прийти как 'HH:mm:ss', это допустимо.
    """
    if not isinstance(now, datetime.datetime) or now.tzinfo is not None:
        return BookingStatus.UNKNOWN

    try:
        start_dt = combine(date_value, start_time, allow_seconds=True)
        end_dt = combine(date_value, end_time, allow_seconds=True)
    except TypeError:
        return BookingStatus.UNKNOWN

    if start_dt is None or end_dt is None:
        return BookingStatus.UNKNOWN

    # Порядок проверок важен: конец ровно в now - это уже past
    if end_dt <= now:
        return BookingStatus.PAST
    if start_dt > now:
        return BookingStatus.FUTURE
    if start_dt < now < end_dt:
        return BookingStatus.ONGOING

    return BookingStatus.UNKNOWN
