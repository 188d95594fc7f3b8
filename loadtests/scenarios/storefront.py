"""Storefront load test scenarios.

Stateful SequentialTaskSet journeys for sellers and shoppers plus a read-only
browsing user. Steps execute in order; each depends on the previous step
succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    cart_quantity,
    price_update,
    product_data,
    registration_data,
    review_data,
    search_term,
)
from loadtests.helpers.state import SellerState, ShopperState


def _register(client, role, state):
    with client.post(
        "/auth/register",
        json=registration_data(role),
        catch_response=True,
        name="POST /auth/register",
    ) as resp:
        if resp.status_code == 201:
            state.token = resp.json()["access_token"]
            return True
        resp.failure(f"Register failed: {resp.status_code}")
        return False


class SellerJourney(SequentialTaskSet):
    """Register -> Add Products -> Reprice -> Delete One.

    Models a seller building and maintaining a small listing.
    """

    def on_start(self):
        self.state = SellerState()

    @task
    def register(self):
        if not _register(self.client, "seller", self.state):
            self.interrupt()

    @task
    def add_products(self):
        for _ in range(3):
            with self.client.post(
                "/products",
                json=product_data(),
                headers=self.state.headers,
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Add product failed: {resp.status_code}")

    @task
    def reprice(self):
        if not self.state.product_ids:
            self.interrupt()
        self.client.put(
            f"/products/{random.choice(self.state.product_ids)}",
            json=price_update(),
            headers=self.state.headers,
            name="PUT /products/{id}",
        )

    @task
    def delete_one(self):
        product_id = self.state.product_ids.pop()
        self.client.delete(f"/products/{product_id}", headers=self.state.headers, name="DELETE /products/{id}")
        self.interrupt()


class ShopperJourney(SequentialTaskSet):
    """Register -> Browse -> Like -> Add to Cart -> Review -> Checkout -> History."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        if not _register(self.client, "buyer", self.state):
            self.interrupt()

    @task
    def browse(self):
        with self.client.get("/products?limit=20", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"Browse failed: {resp.status_code}")
                self.interrupt()
            self.state.product_ids = [p["product_id"] for p in resp.json()["products"] if p["stock"] > 3]
            if not self.state.product_ids:
                resp.success()
                self.interrupt()

    @task
    def like(self):
        self.client.post(
            f"/wishlist/{random.choice(self.state.product_ids)}",
            headers=self.state.headers,
            name="POST /wishlist/{id}",
        )

    @task
    def fill_cart(self):
        for product_id in random.sample(self.state.product_ids, k=min(2, len(self.state.product_ids))):
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": cart_quantity()},
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_product_ids.append(product_id)
                elif resp.status_code in (400, 404):
                    # Stock moved or product deleted by a concurrent seller
                    resp.success()

    @task
    def review(self):
        self.client.post(
            f"/products/{random.choice(self.state.product_ids)}/reviews",
            json=review_data(),
            headers=self.state.headers,
            name="POST /products/{id}/reviews",
        )

    @task
    def checkout(self):
        if not self.state.cart_product_ids:
            self.interrupt()
        with self.client.post("/orders", headers=self.state.headers, catch_response=True, name="POST /orders") as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code}")
                self.interrupt()

    @task
    def history(self):
        self.client.get("/orders", headers=self.state.headers, name="GET /orders")
        self.client.get(f"/orders/{self.state.order_id}", headers=self.state.headers, name="GET /orders/{id}")
        self.interrupt()


class BrowsingUser(HttpUser):
    """Anonymous catalogue traffic: listing, search, detail and stats."""

    wait_time = between(0.5, 2.0)

    @task(5)
    def list_products(self):
        self.client.get(f"/products?page={random.randint(1, 3)}", name="GET /products")

    @task(3)
    def search(self):
        self.client.get(f"/products?search={search_term()}&sort_by=price&sort_order=asc", name="GET /products?search")

    @task(2)
    def detail(self):
        with self.client.get("/products?limit=10", catch_response=True, name="GET /products") as resp:
            products = resp.json().get("products", []) if resp.status_code == 200 else []
        if products:
            product_id = random.choice(products)["product_id"]
            self.client.get(f"/products/{product_id}", name="GET /products/{id}")

    @task(1)
    def categories_and_stats(self):
        self.client.get("/categories", name="GET /categories")
        self.client.get("/stats", name="GET /stats")


class StorefrontUser(HttpUser):
    """Mixed workload: mostly browsing shoppers, some sellers."""

    wait_time = between(0.5, 3.0)
    tasks = {
        ShopperJourney: 6,
        SellerJourney: 2,
    }
