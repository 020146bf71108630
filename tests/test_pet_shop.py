"""Pet shop listing, adoption orders and compatibility recommendations."""

from types import SimpleNamespace

import pytest

from app.modules.pet_shop.domain.services.compatibility import calculate_compatibility_score


def owner_prefs(**overrides):
    prefs = dict(
        daily_availability=1,
        has_outdoor_space=False,
        has_children=False,
        has_allergies=False,
        experience_level=1,
    )
    prefs.update(overrides)
    return SimpleNamespace(**prefs)


def pet_traits(**overrides):
    traits = dict(
        energy_level=3,
        maintenance=2,
        space_required=2,
        child_friendly=False,
        allergy_safe=False,
        neutered=False,
        vaccinated=False,
    )
    traits.update(overrides)
    return SimpleNamespace(**traits)


class TestCompatibilityScore:
    def test_default_owner(self):
        # 20 availability + 9 space + 10 children + 10 allergies + 12 experience
        assert calculate_compatibility_score(owner_prefs(), pet_traits()) == pytest.approx(61)

    def test_perfect_match(self):
        user = owner_prefs(
            daily_availability=2, has_outdoor_space=True, has_children=True, has_allergies=True, experience_level=3
        )
        pet = pet_traits(
            energy_level=3, maintenance=3, child_friendly=True, allergy_safe=True, neutered=True, vaccinated=True
        )

        assert calculate_compatibility_score(user, pet) == 100

    def test_penalties_clamp_at_zero(self):
        user = owner_prefs(daily_availability=1, has_children=True, has_allergies=True, experience_level=1)
        pet = pet_traits(energy_level=5, maintenance=5, space_required=5)

        assert calculate_compatibility_score(user, pet) == 0


class TestPetShop:
    def test_lists_only_available_pets(self, client, make_user, make_pet):
        owner = make_user()
        available = make_pet(name="Available")
        make_pet(name="Adopted", is_available=False)

        response = client.get("/api/users/petShop", headers=owner.headers)

        assert response.status_code == 200
        assert [pet["id"] for pet in response.json()["pets"]] == [available.id]

    def test_pet_details(self, client, make_user, make_pet):
        owner = make_user()
        pet = make_pet()

        response = client.get(f"/api/users/petShop/{pet.id}", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["pet"]["energyLevel"] == 3
        assert response.json()["pet"]["tags"] == ["friendly"]

    def test_unknown_pet(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/petShop/nope", headers=owner.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Pet not found"


class TestAdoptionOrder:
    def test_order_takes_pet_off_the_shop(self, client, make_user, make_pet):
        owner = make_user()
        pet = make_pet()

        response = client.post("/api/users/petShop/order", json={"petId": pet.id}, headers=owner.headers)

        assert response.status_code == 201
        assert response.json()["message"] == "Pet order created successfully"
        assert response.json()["order"]["petId"] == pet.id
        assert client.get("/api/users/petShop", headers=owner.headers).json()["pets"] == []

    def test_second_order_is_rejected(self, client, make_user, make_pet):
        first, second = make_user(), make_user()
        pet = make_pet()
        client.post("/api/users/petShop/order", json={"petId": pet.id}, headers=first.headers)

        response = client.post("/api/users/petShop/order", json={"petId": pet.id}, headers=second.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Pet is not available for adoption"

    def test_unknown_pet_order(self, client, make_user):
        owner = make_user()
        response = client.post("/api/users/petShop/order", json={"petId": "nope"}, headers=owner.headers)

        assert response.status_code == 404


class TestRecommendations:
    def test_ranked_by_score_with_top_three(self, client, make_user, make_pet):
        owner = make_user(has_outdoor_space=True, daily_availability=2, experience_level=3)
        best = make_pet(name="Best", energy_level=3, maintenance=3, neutered=True, vaccinated=True)
        for index in range(3):
            make_pet(name=f"Other {index}", energy_level=5, maintenance=5)

        response = client.get("/api/users/petShop/recommendations", headers=owner.headers)

        assert response.status_code == 200
        body = response.json()
        assert len(body["recommendedPets"]) == 3
        assert len(body["allPets"]) == 4
        assert body["recommendedPets"][0]["id"] == best.id
        scores = [pet["compatibilityScore"] for pet in body["allPets"]]
        assert scores == sorted(scores, reverse=True)
