import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENVIRONMENTS = {"local", "aws"}

class Settings(BaseModel):
    environment: str = "local"
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    database_path: str = "./data/messages.db"
    table_name: str = "q-social-messages"
    aws_region: str = "us-east-1"
    dynamodb_endpoint: Optional[str] = None
    log_level: str = "INFO"

# Split a comma separated env value, dropping blanks
def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

# Build settings from the environment (and .env) once at startup
def load_settings() -> Settings:
    load_dotenv()

    environment = os.getenv("APP_ENV", "local").lower()
    if environment not in ENVIRONMENTS:
        raise ValueError(f"APP_ENV must be one of {sorted(ENVIRONMENTS)}, got '{environment}'")

    values = {"environment": environment}
    raw_origins = os.getenv("CORS_ORIGINS")
    if raw_origins:
        values["cors_origins"] = _split_origins(raw_origins)

    env_fields = {
        "host": "HOST",
        "port": "PORT",
        "database_path": "DATABASE_PATH",
        "table_name": "TABLE_NAME",
        "aws_region": "AWS_REGION",
        "dynamodb_endpoint": "DYNAMODB_ENDPOINT",
        "log_level": "LOG_LEVEL",
    }
    for field, env_name in env_fields.items():
        value = os.getenv(env_name)
        if value:
            values[field] = value

    return Settings(**values)
