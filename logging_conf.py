import os
import logging
from logging.handlers import RotatingFileHandler
from config import settings

# Создаем директорию для логов, если она не существует
os.makedirs(settings.LOG_DIR, exist_ok=True)

# Формат логов
log_format = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
date_format = '%Y-%m-%d %H:%M:%S'

# Базовый логгер приложения
logger = logging.getLogger('iptv_manager')
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

formatter = logging.Formatter(log_format, datefmt=date_format)

# Повторный импорт не должен дублировать обработчики
if not logger.handlers:
    file_handler = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, 'application.log'),
        maxBytes=settings.LOG_FILE_MAX_SIZE,
        backupCount=settings.LOG_FILE_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(logger.level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Вывод в консоль при DEBUG
    if settings.DEBUG:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

def get_logger(name: str) -> logging.Logger:
    """Возвращает логгер с указанным именем"""
    return logging.getLogger(f'iptv_manager.{name}')
