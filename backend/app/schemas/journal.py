from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class JournalCreate(BaseModel):
    title: str
    content: str = ""
    date: datetime


class JournalUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    date: Optional[datetime] = None


class JournalResponse(BaseModel):
    id: int
    account_id: int
    user_id: int
    title: str
    content: str
    date: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JournalListResponse(BaseModel):
    items: list[JournalResponse]
    total: int
