from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class AnnouncementSchema(BaseModel):
    id: str
    tenant_id: Optional[str] = None
    title: str
    body: str
    published_at: datetime
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

class AnnouncementFeedItem(BaseModel):
    id: str
    tenant_id: Optional[str] = None
    title: str
    body: str
    published_at: datetime
    created_at: datetime
    is_read: bool
    model_config = ConfigDict(from_attributes=True)

class UnreadCount(BaseModel):
    count: int

# what clients send
class AnnouncementCreatePayload(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    body: str = Field(min_length=1)
    published_at: Optional[datetime] = None
    model_config = ConfigDict(extra="forbid")

class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    body: Optional[str] = Field(default=None, min_length=1)
    published_at: Optional[datetime] = None
    model_config = ConfigDict(extra="forbid")
