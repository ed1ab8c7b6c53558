"""Catalog browsing load test scenario.

An admin publishes a few books on start; every user then pages through and
searches the catalog.
"""

import os
import random

from locust import HttpUser, between, task

from loadtests.data_generators import book_data, registration_data, search_term
from loadtests.helpers.state import ShopperState


def login(client, email: str, password: str) -> str | None:
    with client.post(
        "/api/v1/login",
        json={"email": email, "password": password},
        catch_response=True,
        name="POST /login",
    ) as resp:
        if resp.status_code == 200:
            return resp.json()["token"]
        resp.failure(f"Login failed: {resp.status_code}")
        return None


def publish_books(client, count: int) -> list[str]:
    """Publish ``count`` books as the configured admin; no-op without one."""
    email = os.environ.get("LOADTEST_ADMIN_EMAIL")
    password = os.environ.get("LOADTEST_ADMIN_PASSWORD")
    if not email or not password:
        return []

    token = login(client, email, password)
    if token is None:
        return []

    book_ids = []
    for _ in range(count):
        with client.post(
            "/api/v1/books",
            json=book_data(),
            headers={"Authorization": f"Bearer {token}"},
            catch_response=True,
            name="POST /books",
        ) as resp:
            if resp.status_code == 201:
                book_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Publish book failed: {resp.status_code}")
    return book_ids


def register(client, state: ShopperState) -> bool:
    state.password = "loadtest-secret"
    payload = registration_data(state.password)
    with client.post("/api/v1/register", json=payload, catch_response=True, name="POST /register") as resp:
        if resp.status_code == 201:
            state.email = payload["email"]
            state.token = resp.json()["token"]
            return True
        resp.failure(f"Register failed: {resp.status_code}")
        return False


class BrowsingUser(HttpUser):
    """Reads only: lists, searches and opens books."""

    wait_time = between(0.5, 2)
    weight = 3

    def on_start(self):
        self.state = ShopperState()
        self.state.book_ids = publish_books(self.client, 2)
        if not register(self.client, self.state):
            self.stop()

    @task(3)
    def list_books(self):
        with self.client.get(
            "/api/v1/books",
            params={"page": random.randint(1, 3), "perPage": 15},
            headers=self.state.headers,
            catch_response=True,
            name="GET /books",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List books failed: {resp.status_code}")
                return
            self.state.book_ids.extend(book["id"] for book in resp.json()["results"])

    @task(2)
    def search_books(self):
        with self.client.get(
            "/api/v1/books",
            params={"title": search_term()},
            headers=self.state.headers,
            catch_response=True,
            name="GET /books?title",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Search books failed: {resp.status_code}")

    @task(1)
    def get_book(self):
        if not self.state.book_ids:
            return
        with self.client.get(
            f"/api/v1/books/{random.choice(self.state.book_ids)}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /books/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get book failed: {resp.status_code}")
