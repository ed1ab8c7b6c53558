"""Purchase load test scenario.

A stateful SequentialTaskSet journey: Register -> Login -> Browse -> Fill cart
-> Order -> List orders. Steps execute in order and each depends on the
previous one succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.helpers.state import ShopperState
from loadtests.scenarios.browsing import login, publish_books, register


class PurchaseJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState()
        self.state.book_ids = list(self.user.published_book_ids)

    @task
    def sign_up(self):
        if not register(self.client, self.state):
            self.interrupt()

    @task
    def sign_in(self):
        token = login(self.client, self.state.email, self.state.password)
        if token is None:
            self.interrupt()
        self.state.token = token

    @task
    def browse(self):
        with self.client.get(
            "/api/v1/books",
            headers=self.state.headers,
            catch_response=True,
            name="GET /books",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List books failed: {resp.status_code}")
                self.interrupt()
            self.state.book_ids.extend(book["id"] for book in resp.json()["results"])
        if not self.state.book_ids:
            self.interrupt()

    @task
    def fill_cart(self):
        candidates = list(dict.fromkeys(self.state.book_ids))
        for book_id in random.sample(candidates, k=min(len(candidates), random.randint(1, 3))):
            with self.client.post(
                f"/api/v1/cart/items/{book_id}",
                headers=self.state.headers,
                catch_response=True,
                name="POST /cart/items/{id}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_item_ids.append(book_id)
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}")

    @task
    def view_cart(self):
        with self.client.get(
            "/api/v1/active-cart",
            headers=self.state.headers,
            catch_response=True,
            name="GET /active-cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get cart failed: {resp.status_code}")
                self.interrupt()

    @task
    def create_order(self):
        with self.client.post(
            "/api/v1/orders",
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Create order failed: {resp.status_code}")
                self.interrupt()

    @task
    def list_orders(self):
        with self.client.get(
            "/api/v1/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Customers going through the purchase journey."""

    tasks = [PurchaseJourney]
    wait_time = between(1, 3)
    weight = 1

    def on_start(self):
        self.published_book_ids = publish_books(self.client, 1)
