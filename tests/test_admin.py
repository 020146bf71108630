"""Admin back-office: dashboard, directory, catalog and order review."""

import pytest

from tests.conftest import PNG_BASE64
from tests.test_store import checkout


def pet_payload(**overrides):
    payload = {
        "name": "Milo",
        "breed": "Corgi",
        "age": 1,
        "price": 300,
        "bio": "Short legs, big heart",
        "description": "Playful corgi puppy",
        "energyLevel": 4,
        "spaceRequired": 2,
        "maintenance": 3,
        "childFriendly": True,
        "tags": ["puppy"],
        "imageBase64": PNG_BASE64,
    }
    payload.update(overrides)
    return payload


def product_payload(**overrides):
    payload = {
        "name": "Salmon Kibble",
        "description": "2kg bag",
        "price": 24.99,
        "stock": 10,
        "category": "food",
        "imageBase64": PNG_BASE64,
    }
    payload.update(overrides)
    return payload


def product_stock(client, admin, product_id):
    products = client.get("/api/admin/products", headers=admin.headers).json()["products"]
    return next(p["stock"] for p in products if p["id"] == product_id)


class TestDashboard:
    def test_stats(self, client, admin, make_user, make_caregiver, make_pet, make_product):
        buyer = make_user()
        make_user()
        make_caregiver()
        make_pet()
        make_pet(is_available=False)
        product = make_product(price=10.0)
        completed = checkout(client, buyer, product, quantity=2).json()["order"]
        checkout(client, buyer, product, quantity=1)
        client.put(f"/api/admin/orders/{completed['id']}", json={"status": "COMPLETED"}, headers=admin.headers)

        response = client.get("/api/admin/dashboard", headers=admin.headers)

        assert response.status_code == 200
        assert response.json()["stats"] == {
            "userCount": 2,
            "availablePetsCount": 1,
            "caregiverCount": 1,
            "petOrdersCount": 0,
            "totalProducts": 1,
            "totalOrders": 2,
            "totalEarnings": 20.0,
        }


class TestDirectory:
    def test_users_without_passwords(self, client, admin, make_user):
        make_user(city="Dhaka")

        users = client.get("/api/admin/users", headers=admin.headers).json()["users"]

        assert users[0]["city"] == "Dhaka"
        assert "password" not in users[0]

    def test_caregivers(self, client, admin, make_caregiver):
        carer = make_caregiver()

        caregivers = client.get("/api/admin/caregivers", headers=admin.headers).json()["caregivers"]

        assert [c["id"] for c in caregivers] == [carer.id]
        assert "password" not in caregivers[0]

    def test_verify_caregiver(self, client, admin, make_caregiver):
        carer = make_caregiver()

        response = client.put(
            f"/api/admin/caregivers/{carer.id}/verify", json={"verified": True}, headers=admin.headers
        )

        assert response.status_code == 200
        assert response.json()["caregiver"] == {
            "id": carer.id,
            "name": carer.name,
            "email": carer.email,
            "verified": True,
        }

    def test_verify_requires_flag(self, client, admin, make_caregiver):
        carer = make_caregiver()

        response = client.put(f"/api/admin/caregivers/{carer.id}/verify", json={}, headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: verified"

    def test_verify_unknown_caregiver(self, client, admin):
        response = client.put("/api/admin/caregivers/nope/verify", json={"verified": True}, headers=admin.headers)

        assert response.status_code == 404


class TestPets:
    def test_create_pet_announces_it(self, client, admin, make_user, storage, notifications_of):
        owners = [make_user(), make_user()]

        response = client.post("/api/admin/pets", json=pet_payload(), headers=admin.headers)

        assert response.status_code == 201
        pet = response.json()["pet"]
        assert pet["isAvailable"] is True
        assert pet["childFriendly"] is True
        assert pet["images"] == storage.uploads[-1]
        assert "/pets/" in pet["images"]
        for owner in owners:
            assert [n.message for n in notifications_of(owner.id)] == [
                "A new pet named Milo (Corgi) is now available for adoption!"
            ]

    def test_create_pet_missing_field(self, client, admin):
        response = client.post("/api/admin/pets", json=pet_payload(energyLevel=None), headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required field: energyLevel"

    def test_list_pets_includes_adopted(self, client, admin, make_pet):
        make_pet()
        make_pet(is_available=False)

        pets = client.get("/api/admin/pets", headers=admin.headers).json()["pets"]

        assert len(pets) == 2

    def test_delete_pet(self, client, admin, make_pet, storage):
        pet = make_pet()

        response = client.delete(f"/api/admin/pets/{pet.id}", headers=admin.headers)

        assert response.json() == {"message": "Pet deleted successfully"}
        assert storage.deleted == [pet.images]

    def test_cannot_delete_adopted_pet(self, client, admin, make_user, make_pet):
        owner = make_user()
        pet = make_pet()
        client.post("/api/users/petShop/order", json={"petId": pet.id}, headers=owner.headers)

        response = client.delete(f"/api/admin/pets/{pet.id}", headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete pet with existing orders"


class TestProducts:
    def test_create_product(self, client, admin, storage):
        response = client.post("/api/admin/products", json=product_payload(), headers=admin.headers)

        assert response.status_code == 201
        product = response.json()["product"]
        assert product["price"] == 24.99
        assert "/products/" in product["image"]

    def test_invalid_category(self, client, admin):
        response = client.post("/api/admin/products", json=product_payload(category="cars"), headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category. Must be food, toy, or medicine"

    def test_partial_update_with_new_image(self, client, admin, make_product, storage):
        product = make_product()

        response = client.put(
            f"/api/admin/products/{product.id}",
            json={"stock": 42, "imageBase64": PNG_BASE64},
            headers=admin.headers,
        )

        updated = response.json()["product"]
        assert updated["stock"] == 42
        assert updated["name"] == product.name
        assert updated["image"] == storage.uploads[-1]
        assert storage.deleted == [product.image]

    def test_update_unknown_product(self, client, admin):
        response = client.put("/api/admin/products/nope", json={"stock": 1}, headers=admin.headers)

        assert response.status_code == 404

    def test_products_with_orders_cannot_be_deleted(self, client, admin, make_user, make_product):
        buyer = make_user()
        sold, unsold = make_product(), make_product(name="Unsold")
        checkout(client, buyer, sold)

        blocked = client.delete(f"/api/admin/products/{sold.id}", headers=admin.headers)
        deleted = client.delete(f"/api/admin/products/{unsold.id}", headers=admin.headers)

        assert blocked.status_code == 400
        assert blocked.json()["message"] == "Cannot delete product with existing orders"
        assert deleted.json() == {"message": "Product deleted successfully"}


class TestOrders:
    def test_list_orders_with_buyer(self, client, admin, make_user, make_product):
        buyer = make_user()
        checkout(client, buyer, make_product())

        orders = client.get("/api/admin/orders", headers=admin.headers).json()["orders"]

        assert orders[0]["user"]["email"] == buyer.email
        assert len(orders[0]["items"]) == 1

    def test_approve_notifies_buyer(self, client, admin, make_user, make_product, notifications_of):
        buyer = make_user()
        order = checkout(client, buyer, make_product()).json()["order"]

        response = client.put(f"/api/admin/orders/{order['id']}", json={"status": "COMPLETED"}, headers=admin.headers)

        assert response.json()["message"] == "Order approved successfully"
        assert response.json()["order"]["status"] == "COMPLETED"
        note = notifications_of(buyer.id)[-1]
        assert note.type == "ORDER_COMPLETED"
        assert note.message == f"Your order #{order['id'][:8]} has been approved."

    def test_cancel_restores_stock(self, client, admin, make_user, make_product, notifications_of):
        buyer = make_user()
        product = make_product(stock=5)
        order = checkout(client, buyer, product, quantity=3).json()["order"]
        assert product_stock(client, admin, product.id) == 2

        response = client.put(f"/api/admin/orders/{order['id']}", json={"status": "CANCELLED"}, headers=admin.headers)

        assert response.json()["message"] == "Order cancelled successfully"
        assert product_stock(client, admin, product.id) == 5
        assert notifications_of(buyer.id)[-1].type == "ORDER_CANCELLED"

    def test_only_pending_orders_move(self, client, admin, make_user, make_product):
        buyer = make_user()
        order = checkout(client, buyer, make_product()).json()["order"]
        client.put(f"/api/admin/orders/{order['id']}", json={"status": "COMPLETED"}, headers=admin.headers)

        response = client.put(f"/api/admin/orders/{order['id']}", json={"status": "CANCELLED"}, headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Only pending orders can be updated"

    @pytest.mark.parametrize("status", ["PENDING", "SHIPPED", None])
    def test_invalid_status(self, client, admin, make_user, make_product, status):
        buyer = make_user()
        order = checkout(client, buyer, make_product()).json()["order"]

        response = client.put(f"/api/admin/orders/{order['id']}", json={"status": status}, headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid status. Must be COMPLETED or CANCELLED"

    def test_unknown_order(self, client, admin):
        response = client.put("/api/admin/orders/nope", json={"status": "COMPLETED"}, headers=admin.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"
