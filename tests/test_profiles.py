"""Owner and caregiver profile endpoints."""

from tests.conftest import PNG_BASE64


class TestUserData:
    def test_userdata_includes_orders_and_notifications(self, client, make_user, make_pet):
        owner = make_user(city="Dhaka", area="Gulshan")
        pet = make_pet()
        client.post("/api/users/petShop/order", json={"petId": pet.id}, headers=owner.headers)

        response = client.get(f"/api/users/userdata?id={owner.id}", headers=owner.headers)

        assert response.status_code == 200
        user = response.json()["user"]
        assert response.json()["message"] == "User data retrieved successfully"
        assert user["city"] == "Dhaka"
        assert "password" not in user
        assert user["petOrders"][0]["pet"]["id"] == pet.id
        assert user["notifications"] == []

    def test_missing_id(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/userdata", headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Bad Request: Missing user ID"

    def test_unknown_user(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/userdata?id=missing", headers=owner.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Not Found: User not found"


class TestUserUpdates:
    def test_update_profile(self, client, make_user):
        owner = make_user()
        response = client.put(
            "/api/users/update-profile",
            json={"id": owner.id, "name": "Renamed", "age": 30, "city": "Dhaka", "area": "Banani"},
            headers=owner.headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Profile updated successfully"
        assert response.json()["user"]["name"] == "Renamed"
        assert response.json()["user"]["age"] == 30

    def test_cannot_update_someone_else(self, client, make_user):
        owner, other = make_user(), make_user()
        response = client.put(
            "/api/users/update-profile", json={"id": other.id, "name": "Hacked"}, headers=owner.headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Forbidden: You can only update your own profile"

    def test_update_preferences(self, client, make_user):
        owner = make_user()
        response = client.put(
            "/api/users/update-preferences",
            json={
                "id": owner.id,
                "dailyAvailability": 4,
                "hasOutdoorSpace": True,
                "hasChildren": True,
                "hasAllergies": False,
                "experienceLevel": 3,
            },
            headers=owner.headers,
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["dailyAvailability"] == 4
        assert user["hasOutdoorSpace"] is True
        assert user["experienceLevel"] == 3

    def test_foreign_preferences_forbidden(self, client, make_user):
        owner, other = make_user(), make_user()
        response = client.put(
            "/api/users/update-preferences", json={"id": other.id, "hasChildren": True}, headers=owner.headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Forbidden: You can only update your own preferences"

    def test_update_image_replaces_old_one(self, client, make_user, storage):
        owner = make_user(image="https://storage.test/user_profiles/old.jpg")
        response = client.put(
            "/api/users/update-image", json={"id": owner.id, "imageBase64": PNG_BASE64}, headers=owner.headers
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Profile image updated successfully"
        assert response.json()["user"]["image"] == storage.uploads[-1]
        assert "/user_profiles/" in storage.uploads[-1]
        assert storage.deleted == ["https://storage.test/user_profiles/old.jpg"]

    def test_failed_old_image_delete_is_not_fatal(self, client, make_user, storage):
        owner = make_user(image="https://storage.test/user_profiles/old.jpg")
        storage.fail_deletes = True

        response = client.put(
            "/api/users/update-image", json={"id": owner.id, "imageBase64": PNG_BASE64}, headers=owner.headers
        )

        assert response.status_code == 200

    def test_update_image_requires_image(self, client, make_user):
        owner = make_user()
        response = client.put("/api/users/update-image", json={"id": owner.id}, headers=owner.headers)

        assert response.status_code == 400


class TestCaregiverProfile:
    def test_caregiverdata(self, client, make_caregiver):
        carer = make_caregiver(city="Dhaka")
        response = client.get(f"/api/caregivers/caregiverdata?id={carer.id}", headers=carer.headers)

        assert response.status_code == 200
        caregiver = response.json()["caregiver"]
        assert caregiver["city"] == "Dhaka"
        assert caregiver["verified"] is False
        assert caregiver["totalEarnings"] == 0

    def test_update_caregiver_profile(self, client, make_caregiver):
        carer = make_caregiver()
        response = client.put(
            "/api/caregivers/update-profile",
            json={"id": carer.id, "bio": "Dog lover", "hourlyRate": 12.5, "area": "Gulshan"},
            headers=carer.headers,
        )

        assert response.status_code == 200
        assert response.json()["caregiver"]["bio"] == "Dog lover"
        assert response.json()["caregiver"]["hourlyRate"] == 12.5

    def test_caregiver_image_goes_to_caregiver_folder(self, client, make_caregiver, storage):
        carer = make_caregiver()
        response = client.put(
            "/api/caregivers/update-image", json={"id": carer.id, "imageBase64": PNG_BASE64}, headers=carer.headers
        )

        assert response.status_code == 200
        assert "/caregiver_profiles/" in response.json()["caregiver"]["image"]

    def test_foreign_caregiver_update_forbidden(self, client, make_caregiver):
        carer, other = make_caregiver(), make_caregiver()
        response = client.put(
            "/api/caregivers/update-profile", json={"id": other.id, "bio": "x"}, headers=carer.headers
        )

        assert response.status_code == 403
