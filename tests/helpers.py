"""Payload builders shared by the test modules."""
from typing import Optional


def make_content(key: str = "hero_section", **overrides) -> dict:
    payload = {
        "content_key": key,
        "content_type": "section",
        "title": "Welcome",
        "content": {"body": "Hello"},
    }
    payload.update(overrides)
    return payload


def make_member(first: str = "Ada", last: str = "Obi", **overrides) -> dict:
    payload = {"first_name": first, "last_name": last, "position": "Secretary"}
    payload.update(overrides)
    return payload


def make_school(name: str = "Bright Stars Academy", lga: Optional[str] = "Ikeja") -> dict:
    return {"school_name": name, "address": "12 Allen Avenue", "lga": lga}
