from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    APP_NAME: str = "Agent Office"
    FRONTEND_URL: str = "http://localhost:5173"

    ROOT_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DB_PATH: Path = Path(__file__).resolve().parent.parent.parent / "agentoffice.db"

    # Simulated latency for the scripted agents; 0 disables it
    THINK_DELAY_SECONDS: float = 0.5
    TOOL_DELAY_SCALE: float = 1.0

    # Recent events kept by the office for late observers
    EVENT_BUFFER_SIZE: int = 50

    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent.parent / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
