from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional, Union


class TrackRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    media_id: Optional[Union[int, str]] = None
    progress_seconds: Optional[float] = 0
    completed: Optional[bool] = False


class ActivityLogEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    user_name: Optional[str] = None
    phone_number: Optional[str] = None
    action: str
    details: Optional[str] = None
    created_at: Optional[datetime] = None
