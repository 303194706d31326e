import os
from dotenv import load_dotenv

# Загружаем .env (даже если Docker передает переменные — безопасно)
load_dotenv()

class Settings:
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", 8000))
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///data/iptv.db")

    # Логирование
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE_MAX_SIZE: int = int(os.getenv("LOG_FILE_MAX_SIZE", 5 * 1024 * 1024))
    LOG_FILE_BACKUP_COUNT: int = int(os.getenv("LOG_FILE_BACKUP_COUNT", 3))

    # Кэш и история
    CACHE_EXPIRY_DAYS: int = int(os.getenv("CACHE_EXPIRY_DAYS", 7))
    MAX_URL_HISTORY: int = int(os.getenv("MAX_URL_HISTORY", 10))

    # Загрузка плейлистов по сети
    FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", 30))
    FETCH_CONNECT_TIMEOUT: float = float(os.getenv("FETCH_CONNECT_TIMEOUT", 10))
    USER_AGENT: str = os.getenv("USER_AGENT", "IPTV-M3U-Manager/1.0")

settings = Settings()
