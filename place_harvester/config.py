from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- HTTP server ---
    HOST: str = Field(
        default="0.0.0.0",
        description="Address the HTTP server binds to.",
    )
    PORT: int = Field(
        default=5000,
        description="Port the HTTP server listens on.",
    )

    # --- MongoDB ---
    MONGODB_URI: str = Field(
        default="mongodb://localhost:27017/",
        description="MongoDB connection string.",
    )
    MONGODB_DATABASE: str = Field(
        default="",
        description="Database name. Empty means the database named in the URI.",
    )
    MONGODB_COLLECTION: str = Field(
        default="businesses",
        description="Collection that receives place records.",
    )

    # --- Google Places API ---
    GOOGLE_API_KEY: str = Field(
        default="",
        description="API key for the Google Places text search and details endpoints.",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout applied to every Places API request.",
    )

    # --- Google Sheets API ---
    SPREADSHEET_ID: str = Field(
        default="",
        description="Identifier of the spreadsheet that receives summary rows.",
    )
    SHEET_RANGE: str = Field(
        default="Sheet1!A2",
        description="A1-notation anchor where rows are appended.",
    )
    GOOGLE_CREDENTIALS_FILE: str = Field(
        default="credentials.json",
        description="Service account key file with spreadsheet write scope.",
    )
    SHEETS_CACHE_CLIENT: bool = Field(
        default=False,
        description="Reuse the authenticated Sheets client across requests.",
    )

    # --- Logging & observability ---
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Minimum level for the loguru sink.",
    )
    OTEL_SERVICE_NAME: str = Field(
        default="place-harvester",
        description="Service name reported on OpenTelemetry spans.",
    )
    OBSERVABILITY_ENABLED: bool = Field(
        default=True,
        description="Create OpenTelemetry spans for pipeline stages.",
    )


settings = Settings()
