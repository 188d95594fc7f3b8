"""Faker-based data generators for Locust load test scenarios.

Payloads pass the domain's validation rules (username 3-30 chars, product
name 3-100 chars, rating 1-5, cart quantity 1-10) and match the field names
of the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["apparel", "footwear", "accessories", "home", "outdoor"]


def username(prefix: str = "lt") -> str:
    """Unique usernames like 'lt_jsmith_a1b2c3'."""
    return f"{prefix}_{fake.user_name()[:15]}_{uuid.uuid4().hex[:6]}"


def registration_data(role: str = "buyer") -> dict:
    return {
        "username": username(role[:1]),
        "password": fake.password(length=12),
        "email": f"{uuid.uuid4().hex[:8]}@{fake.free_email_domain()}",
        "role": role,
    }


def product_data() -> dict:
    return {
        "name": fake.catch_phrase()[:100],
        "price": round(random.uniform(5.0, 250.0), 2),
        "category": random.choice(CATEGORIES),
        "description": fake.paragraph(nb_sentences=3),
        "image": fake.image_url(),
        "stock": random.randint(20, 200),
    }


def price_update() -> dict:
    return {"price": round(random.uniform(5.0, 250.0), 2)}


def review_data() -> dict:
    return {
        "rating": random.randint(1, 5),
        "comment": fake.sentence(nb_words=12)[:500],
    }


def cart_quantity() -> int:
    return random.randint(1, 3)


def search_term() -> str:
    return random.choice([*CATEGORIES, fake.word()])
