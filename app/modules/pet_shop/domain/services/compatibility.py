"""
Pet/owner compatibility scoring for pet shop recommendations.

Scores are out of 100: availability vs energy and maintenance (25), outdoor space (15),
children (15), allergies (15), experience vs maintenance (15), health (15).
"""

from typing import Any

from app.shared.utils.helpers import clamp

MAX_SCORE = 100


def calculate_compatibility_score(user: Any, pet: Any) -> float:
    """
    Compatibility of `pet` with `user`'s preferences.

    Both arguments only need the relevant attributes (ORM rows work).
    Returns a float in [0, 100], unrounded.
    """
    score = 0.0

    # Higher energy and maintenance need more daily time
    availability = 25 - abs(user.daily_availability * 3 - (pet.energy_level + pet.maintenance)) * 2.5
    score += max(0, availability)

    if user.has_outdoor_space:
        score += 15
    else:
        score += 15 - pet.space_required * 3

    if user.has_children and not pet.child_friendly:
        score -= 15
    elif user.has_children and pet.child_friendly:
        score += 15
    else:
        score += 10

    if user.has_allergies and not pet.allergy_safe:
        score -= 15
    elif user.has_allergies and pet.allergy_safe:
        score += 15
    else:
        score += 10

    experience = 15 - abs(user.experience_level - pet.maintenance) * 3
    score += max(0, experience)

    if pet.neutered:
        score += 7.5
    if pet.vaccinated:
        score += 7.5

    return clamp(score, 0, MAX_SCORE)
