from pydantic import BaseModel, ConfigDict
from typing import Optional

from courtside.schemas.enums import ComplianceStatus
from courtside.schemas.types import UtcDatetime


class ComplianceSource(BaseModel):
    id: str
    data_source_name: str
    terms_url: Optional[str] = None
    compliance_status: ComplianceStatus = ComplianceStatus.PENDING_REVIEW
    reviewer: Optional[str] = None
    notes: Optional[str] = None
    last_reviewed: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True, extra="ignore")


class Alias(BaseModel):
    id: str
    alias_text: Optional[str] = None
    player_id: Optional[str] = None
    is_auto_generated: bool = False
    created_at: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None
