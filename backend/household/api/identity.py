from fastapi import APIRouter

from ..config import current_participant, save_identity, clear_identity
from ..schemas import IdentityUpdate, IdentityResponse

router = APIRouter()


@router.get("/", response_model=IdentityResponse)
def get_identity():
    """Which participant this client records expenses as."""
    return IdentityResponse(participant=current_participant())


@router.put("/", response_model=IdentityResponse)
def set_identity(data: IdentityUpdate):
    identity = save_identity(data.participant)
    return IdentityResponse(participant=identity.participant)


@router.delete("/", status_code=204)
def reset_identity():
    clear_identity()
    return None
