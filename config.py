from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Переменные читаются из .env
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    NOCODB_URL: str
    NOCODB_API_TOKEN: str

    # ID таблиц в NocoDB
    BOOKINGS_TABLE_ID: str = "bookings"
    CUSTOMERS_TABLE_ID: str = "customers"
    INVOICES_TABLE_ID: str = "invoices"
    SETTINGS_TABLE_ID: str = "app_settings"

    INVOICE_DUE_DAYS: int = 15
    LOG_LEVEL: str = "INFO"

    # AI-анализ отзывов
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_FEEDBACK: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_FEEDBACK: float = 0.2
    BUSINESS_NAME: str = "The Workplace"

# Единый экземпляр настроек для всего приложения
settings = Settings()
