"""Faker-based data generators for Locust load test scenarios.

Payloads pass the API's validation rules and use its camelCase field names.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def valid_email() -> str:
    """Emails unique enough for repeated registrations against one database."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def registration_data(password: str) -> dict:
    return {
        "firstName": fake.first_name()[:100],
        "lastName": fake.last_name()[:100],
        "email": valid_email(),
        "password": password,
        "passwordConfirmation": password,
    }


def book_data() -> dict:
    """Generate a create-book payload with one or two images."""
    return {
        "title": fake.catch_phrase()[:100],
        "description": fake.paragraph(nb_sentences=3)[:255],
        "authorName": fake.name()[:100],
        "contentId": str(uuid.uuid4()),
        "price": random.randint(199, 4999),
        "releaseDate": fake.date_time_between(start_date="-30y").isoformat(),
        "images": [
            {"id": str(uuid.uuid4()), "description": fake.sentence(nb_words=4)[:100]}
            for _ in range(random.randint(1, 2))
        ],
    }


def search_term() -> str:
    return fake.word()
