from typing import Annotated, List, Literal

from pydantic import BaseModel, Field, field_validator

from ...utils.routing import MAX_ID
from .config import TeamDefaultConfig


class TeamCreate(BaseModel):
    name: str = Field(
        ...,
        min_length=TeamDefaultConfig.NAME_MIN_LENGTH,
        max_length=TeamDefaultConfig.NAME_MAX_LENGTH,
    )
    member_ids: List[Annotated[int, Field(ge=1, le=MAX_ID)]] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Team name is required')
        return v

    class Config:
        extra = "ignore"
        str_strip_whitespace = True


class InvitationResponse(BaseModel):
    status: Literal['approved', 'rejected']

    class Config:
        extra = "ignore"
        str_strip_whitespace = True
