from sqlalchemy.orm import Session

from config import settings
from database import StoredSettings
from models import AppSettings

SETTINGS_ID = 1


def _to_model(row: StoredSettings) -> AppSettings:
    return AppSettings(
        m3u_url=row.m3u_url or "",
        search_term=row.search_term or "",
        selected_group=row.selected_group or "",
        last_used_urls=list(row.last_used_urls or []),
    )


def get_settings(db: Session) -> AppSettings:
    row = db.get(StoredSettings, SETTINGS_ID)
    if row is None:
        return AppSettings()
    return _to_model(row)


def save_settings(db: Session, **changes) -> AppSettings:
    """Частичное обновление: переданные поля сливаются с текущими настройками."""
    row = db.get(StoredSettings, SETTINGS_ID)
    if row is None:
        row = StoredSettings(id=SETTINGS_ID, m3u_url="", search_term="", selected_group="", last_used_urls=[])
        db.add(row)

    for field, value in changes.items():
        if value is None:
            continue
        if field not in AppSettings.model_fields:
            raise ValueError(f"Unknown setting: {field}")
        setattr(row, field, list(value) if field == "last_used_urls" else value)

    db.commit()
    return _to_model(row)


def add_url_to_history(db: Session, url: str) -> AppSettings:
    urls = [existing for existing in get_settings(db).last_used_urls if existing != url]
    return save_settings(db, last_used_urls=[url, *urls][:settings.MAX_URL_HISTORY])


def clear_settings(db: Session) -> None:
    db.query(StoredSettings).delete()
    db.commit()
