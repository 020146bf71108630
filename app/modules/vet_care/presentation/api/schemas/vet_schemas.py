"""
Vet care request/response schemas for PetVally.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.shared.core.schemas import APIModel


class VetDoctorResponse(APIModel):
    id: str
    name: str
    image: Optional[str] = None
    specialty: List[str] = Field(default_factory=list)
    country: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    contact: Optional[str] = None


class VetSummary(APIModel):
    id: str
    name: str
    image: Optional[str] = None


class AppointmentResponse(APIModel):
    id: str
    user_id: str
    vet_id: str
    date: datetime
    time: str
    reason: str
    created_at: datetime
    vet: Optional[VetSummary] = None


class CreateAppointmentRequest(APIModel):
    vet_id: Optional[str] = None
    date: Optional[datetime] = None
    time: Optional[str] = None
    reason: Optional[str] = None
