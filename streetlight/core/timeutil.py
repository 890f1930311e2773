from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo
from .config import settings


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local(tz: Optional[str] = None) -> datetime:
    return now_utc().astimezone(ZoneInfo(tz or settings.timezone))
