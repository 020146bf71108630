"""Store catalog, cart, checkout and product ratings."""

SHIPPING = {
    "name": "Alice",
    "address": "House 1, Road 2",
    "city": "Dhaka",
    "state": "Dhaka",
    "zip": "1212",
    "country": "Bangladesh",
}


def add_to_cart(client, account, product_id, quantity=1):
    return client.post(
        "/api/users/cart", json={"productId": product_id, "quantity": quantity}, headers=account.headers
    )


def checkout(client, account, product, quantity=1):
    add_to_cart(client, account, product.id, quantity)
    return client.post("/api/users/orders", json={"shippingInfo": SHIPPING}, headers=account.headers)


class TestCatalog:
    def test_list_with_rating_stats(self, client, make_user, make_product):
        owner = make_user()
        make_product(name="Kibble", category="food")

        response = client.get("/api/users/store", headers=owner.headers)

        assert response.status_code == 200
        product = response.json()["products"][0]
        assert product["name"] == "Kibble"
        assert product["avgRating"] == 0
        assert product["ratingCount"] == 0

    def test_category_filter(self, client, make_user, make_product):
        owner = make_user()
        make_product(name="Kibble", category="food")
        make_product(name="Ball", category="toy")

        response = client.get("/api/users/store?category=toy", headers=owner.headers)

        assert [p["name"] for p in response.json()["products"]] == ["Ball"]

    def test_unknown_category(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/store?category=cars", headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category. Must be food, toy, or medicine"

    def test_featured_orders_by_rating(self, client, make_user, make_product):
        buyer = make_user()
        plain = make_product(name="Plain")
        loved = make_product(name="Loved")
        checkout(client, buyer, loved)
        client.post("/api/users/products/rating", json={"productId": loved.id, "rating": 5}, headers=buyer.headers)

        response = client.get("/api/users/store?featured=true", headers=buyer.headers)

        names = [p["name"] for p in response.json()["products"]]
        assert names[0] == "Loved"
        assert plain.name in names

    def test_product_detail_with_ratings(self, client, make_user, make_product):
        buyer = make_user()
        product = make_product()
        checkout(client, buyer, product)
        client.post(
            "/api/users/products/rating",
            json={"productId": product.id, "rating": 4, "comment": "Good"},
            headers=buyer.headers,
        )

        response = client.get(f"/api/users/store/{product.id}", headers=buyer.headers)

        assert response.status_code == 200
        detail = response.json()["product"]
        assert detail["avgRating"] == 4.0
        assert detail["ratingCount"] == 1
        assert detail["ratings"][0]["user"]["name"] == buyer.name

    def test_unknown_product(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/store/nope", headers=owner.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"


class TestCart:
    def test_empty_cart_placeholder(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/cart", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["cart"]["items"] == []
        assert response.json()["cart"]["totalPrice"] == 0

    def test_add_accumulates_quantity(self, client, make_user, make_product):
        owner = make_user()
        product = make_product(price=2.5)
        add_to_cart(client, owner, product.id, 2)

        response = add_to_cart(client, owner, product.id, 1)

        assert response.status_code == 200
        assert response.json()["message"] == "Product added to cart successfully"
        assert response.json()["cartItem"]["quantity"] == 3

        cart = client.get("/api/users/cart", headers=owner.headers).json()["cart"]
        assert len(cart["items"]) == 1
        assert cart["items"][0]["totalPrice"] == 7.5
        assert cart["totalPrice"] == 7.5

    def test_add_counts_what_is_already_in_the_cart(self, client, make_user, make_product):
        owner = make_user()
        product = make_product(stock=5)
        add_to_cart(client, owner, product.id, 4)

        response = add_to_cart(client, owner, product.id, 2)

        assert response.status_code == 400
        assert response.json()["message"] == "Not enough stock available"

    def test_add_requires_positive_quantity(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()

        response = add_to_cart(client, owner, product.id, 0)

        assert response.status_code == 400
        assert response.json()["message"] == "Bad Request: Missing or invalid parameters"

    def test_add_unknown_product(self, client, make_user):
        owner = make_user()
        assert add_to_cart(client, owner, "nope").status_code == 404

    def test_update_quantity(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()
        item = add_to_cart(client, owner, product.id).json()["cartItem"]

        response = client.put(
            "/api/users/cart/item", json={"cartItemId": item["id"], "quantity": 4}, headers=owner.headers
        )

        assert response.status_code == 200
        assert response.json()["removed"] is False
        assert client.get("/api/users/cart", headers=owner.headers).json()["cart"]["items"][0]["quantity"] == 4

    def test_update_beyond_stock(self, client, make_user, make_product):
        owner = make_user()
        product = make_product(stock=2)
        item = add_to_cart(client, owner, product.id).json()["cartItem"]

        response = client.put(
            "/api/users/cart/item", json={"cartItemId": item["id"], "quantity": 3}, headers=owner.headers
        )

        assert response.status_code == 400

    def test_zero_quantity_removes(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()
        item = add_to_cart(client, owner, product.id).json()["cartItem"]

        response = client.put(
            "/api/users/cart/item", json={"cartItemId": item["id"], "quantity": 0}, headers=owner.headers
        )

        assert response.json()["removed"] is True
        assert response.json()["message"] == "Item removed from cart"
        assert client.get("/api/users/cart", headers=owner.headers).json()["cart"]["items"] == []

    def test_delete_item(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()
        item = add_to_cart(client, owner, product.id).json()["cartItem"]

        response = client.delete(f"/api/users/cart/item?id={item['id']}", headers=owner.headers)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_delete_requires_id(self, client, make_user):
        owner = make_user()
        response = client.delete("/api/users/cart/item", headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Bad Request: Missing cart item ID"

    def test_foreign_cart_item(self, client, make_user, make_product):
        owner, other = make_user(), make_user()
        product = make_product()
        item = add_to_cart(client, owner, product.id).json()["cartItem"]

        response = client.delete(f"/api/users/cart/item?id={item['id']}", headers=other.headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Unauthorized: Cart item does not belong to user"

    def test_unknown_cart_item(self, client, make_user):
        owner = make_user()
        response = client.delete("/api/users/cart/item?id=nope", headers=owner.headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Cart item not found"


class TestOrders:
    def test_checkout_creates_pending_order(self, client, make_user, make_product):
        owner = make_user()
        product = make_product(price=10.0, stock=5)

        response = checkout(client, owner, product, quantity=2)

        assert response.status_code == 201
        order = response.json()["order"]
        assert order["status"] == "PENDING"
        assert order["totalPrice"] == 20.0
        assert order["shippingCity"] == "Dhaka"
        assert order["items"][0]["price"] == 10.0
        assert order["items"][0]["quantity"] == 2

        detail = client.get(f"/api/users/store/{product.id}", headers=owner.headers).json()["product"]
        assert detail["stock"] == 3
        assert client.get("/api/users/cart", headers=owner.headers).json()["cart"]["items"] == []

    def test_missing_shipping_field(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()
        add_to_cart(client, owner, product.id)
        shipping = dict(SHIPPING, zip="")

        response = client.post("/api/users/orders", json={"shippingInfo": shipping}, headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required shipping information"

    def test_empty_cart(self, client, make_user):
        owner = make_user()
        response = client.post("/api/users/orders", json={"shippingInfo": SHIPPING}, headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"

    def test_stock_sold_out_since_adding_to_cart(self, client, make_user, make_product):
        first, second = make_user(), make_user()
        product = make_product(name="Catnip", stock=2)
        add_to_cart(client, second, product.id, quantity=2)
        assert checkout(client, first, product, quantity=2).status_code == 201

        response = client.post("/api/users/orders", json={"shippingInfo": SHIPPING}, headers=second.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Not enough stock for Catnip"
        assert len(client.get("/api/users/cart", headers=second.headers).json()["cart"]["items"]) == 1
        assert client.get("/api/users/orders", headers=second.headers).json()["orders"] == []

    def test_list_orders(self, client, make_user, make_product):
        owner, other = make_user(), make_user()
        product = make_product()
        checkout(client, owner, product)
        checkout(client, other, product)

        response = client.get("/api/users/orders", headers=owner.headers)

        assert response.status_code == 200
        orders = response.json()["orders"]
        assert len(orders) == 1
        assert orders[0]["userId"] == owner.id
        assert orders[0]["items"][0]["product"]["id"] == product.id


class TestRatings:
    def test_must_have_purchased(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()

        response = client.post(
            "/api/users/products/rating", json={"productId": product.id, "rating": 5}, headers=owner.headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only rate products you have purchased"

    def test_rating_range(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()
        checkout(client, owner, product)

        for bad in (0, 6, 4.5):
            response = client.post(
                "/api/users/products/rating", json={"productId": product.id, "rating": bad}, headers=owner.headers
            )
            assert response.status_code == 400
            assert response.json()["message"] == "Rating must be between 1 and 5"

    def test_rate_once(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()
        checkout(client, owner, product)
        payload = {"productId": product.id, "rating": 5, "comment": "Great"}

        first = client.post("/api/users/products/rating", json=payload, headers=owner.headers)
        second = client.post("/api/users/products/rating", json=payload, headers=owner.headers)

        assert first.status_code == 201
        assert first.json()["rating"]["rating"] == 5
        assert second.status_code == 409

    def test_get_own_rating(self, client, make_user, make_product):
        owner = make_user()
        product = make_product()

        empty = client.get(f"/api/users/products/rating?productId={product.id}", headers=owner.headers)
        assert empty.json() == {"message": "No rating found", "rating": None}

        checkout(client, owner, product)
        client.post("/api/users/products/rating", json={"productId": product.id, "rating": 3}, headers=owner.headers)

        found = client.get(f"/api/users/products/rating?productId={product.id}", headers=owner.headers)
        assert found.json()["rating"]["rating"] == 3

    def test_get_requires_product_id(self, client, make_user):
        owner = make_user()
        response = client.get("/api/users/products/rating", headers=owner.headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Bad Request: Missing product ID"

    def test_update_own_rating_only(self, client, make_user, make_product):
        owner, other = make_user(), make_user()
        product = make_product()
        checkout(client, owner, product)
        rating = client.post(
            "/api/users/products/rating", json={"productId": product.id, "rating": 2}, headers=owner.headers
        ).json()["rating"]

        forbidden = client.put(
            "/api/users/products/rating", json={"ratingId": rating["id"], "rating": 5}, headers=other.headers
        )
        updated = client.put(
            "/api/users/products/rating",
            json={"ratingId": rating["id"], "rating": 4, "comment": "Grew on me"},
            headers=owner.headers,
        )

        assert forbidden.status_code == 403
        assert forbidden.json()["message"] == "You can only update your own ratings"
        assert updated.status_code == 200
        assert updated.json()["rating"]["rating"] == 4
        assert updated.json()["rating"]["comment"] == "Grew on me"

    def test_update_unknown_rating(self, client, make_user):
        owner = make_user()
        response = client.put(
            "/api/users/products/rating", json={"ratingId": "nope", "rating": 4}, headers=owner.headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Rating not found"
