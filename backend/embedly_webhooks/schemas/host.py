from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WebhookResponse(_CamelModel):
    status: str = "success"
    event_type: Optional[str] = None
    event_id: Optional[str] = None
    processed_at: datetime


class WebhookErrorResponse(_CamelModel):
    status: str = "failed"
    error: str
    processed_at: datetime


class SignatureCheckRequest(_CamelModel):
    payload: str = ""
    signature: str = ""


class SignatureCheckResponse(_CamelModel):
    is_valid: bool
    message: str
    timestamp: datetime = Field(..., description="Time of the check (UTC)")
