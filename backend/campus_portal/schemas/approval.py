from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class ItemTypeEnum(StrEnum):
    SHOP = "shop"
    CLUB = "club"


class DecisionActionEnum(StrEnum):
    APPROVE = "approve"
    REJECT = "reject"


class ApprovalEmailRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_type: ItemTypeEnum
    item_id: str = Field(..., pattern=UUID_PATTERN)
    item_name: str = Field(..., min_length=1, max_length=200)
    submitter_name: str = Field(..., min_length=1, max_length=200)
    submitter_email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    faculty_email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    description: str | None = Field(None, max_length=2000)


class ApprovalDecisionRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=100, pattern=UUID_PATTERN)
    action: DecisionActionEnum


class ApprovalRequestResult(BaseModel):
    success: bool = True


class ApprovalDecisionResult(BaseModel):
    success: bool = True
    message: str
