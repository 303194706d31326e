from sqlalchemy import create_engine, Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.engine import make_url
from datetime import datetime, timezone
import os

from config import settings


def utcnow() -> datetime:
    # SQLite хранит время без часового пояса, поэтому работаем с naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Создаем директорию для файла базы данных
db_url = make_url(settings.DATABASE_URL)
if db_url.drivername.startswith("sqlite") and db_url.database and db_url.database != ":memory:":
    os.makedirs(os.path.dirname(db_url.database) or ".", exist_ok=True)

# Создаем движок базы данных
engine = create_engine(settings.DATABASE_URL, connect_args={"check_same_thread": False})

# Создаем базовый класс для моделей
Base = declarative_base()

# Кэш последнего импортированного плейлиста (единственная запись "latest")
class CacheEntry(Base):
    __tablename__ = "channel_cache"

    id = Column(String, primary_key=True, default="latest")
    channels = Column(JSON, nullable=False)
    timestamp = Column(DateTime, default=utcnow, nullable=False)
    source = Column(String, nullable=False)  # 'file' или 'url'
    source_identifier = Column(String, nullable=False)  # имя файла или URL

# Избранные каналы
class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(String, primary_key=True, index=True)
    channel = Column(JSON, nullable=False)
    timestamp = Column(DateTime, default=utcnow, index=True)

# Настройки приложения (одна запись)
class StoredSettings(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, default=1)
    m3u_url = Column(String, default="")
    search_term = Column(String, default="")
    selected_group = Column(String, default="")
    last_used_urls = Column(JSON, default=list)

# Создаем фабрику сессий
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Функция для получения сессии базы данных
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Создаем таблицы при запуске
Base.metadata.create_all(bind=engine)
