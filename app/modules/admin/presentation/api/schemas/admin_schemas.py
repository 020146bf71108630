"""
Admin back-office request/response schemas for PetVally.
"""

from typing import Optional

from app.shared.core.schemas import APIModel


class DashboardStats(APIModel):
    user_count: int
    available_pets_count: int
    caregiver_count: int
    pet_orders_count: int
    total_products: int
    total_orders: int
    total_earnings: float


class CaregiverVerification(APIModel):
    id: str
    name: str
    email: str
    verified: bool


class VerifyCaregiverRequest(APIModel):
    verified: Optional[bool] = None
