# 📄 File: app/modules/pet_shop/presentation/api/schemas/pet_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a pet listing and an adoption order look like when sent to the app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the pet shop and the admin pet endpoints.
#
# 🔄 Connected Modules / Calls From:
# - pet shop router, admin router, accounts user data response

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.shared.core.schemas import APIModel


class PetResponse(APIModel):
    """Pet listing."""

    id: str
    name: str
    breed: str
    age: int
    price: float
    images: str
    is_available: bool
    bio: str
    description: str
    energy_level: int
    space_required: int
    maintenance: int
    child_friendly: bool
    allergy_safe: bool
    neutered: bool
    vaccinated: bool
    tags: List[str] = Field(default_factory=list)
    created_at: datetime


class ScoredPetResponse(PetResponse):
    compatibility_score: float


class PetOrderResponse(APIModel):
    id: str
    user_id: str
    pet_id: str
    created_at: datetime
    pet: Optional[PetResponse] = None


class PetOrderRequest(APIModel):
    pet_id: str


class PetCreateRequest(APIModel):
    """
    Admin pet creation payload.

    Required fields are checked by the service so blank values
    get the same message as absent ones.
    """

    name: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[int] = None
    price: Optional[float] = None
    bio: Optional[str] = None
    description: Optional[str] = None
    energy_level: Optional[int] = None
    space_required: Optional[int] = None
    maintenance: Optional[int] = None
    child_friendly: bool = False
    allergy_safe: bool = False
    neutered: bool = False
    vaccinated: bool = False
    tags: List[str] = Field(default_factory=list)
    image_base64: Optional[str] = None
