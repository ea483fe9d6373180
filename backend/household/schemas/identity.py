from pydantic import BaseModel

from ..models.expense import Participant


class IdentityUpdate(BaseModel):
    participant: Participant


class IdentityResponse(BaseModel):
    participant: Participant | None = None
