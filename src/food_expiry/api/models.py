"""Pydantic models for the JSON API."""

from pydantic import BaseModel


class FoodCreate(BaseModel):
    """Request payload for registering a food entry."""

    name: str = ""
    location: str = ""
    period: str | int = ""
    expiry_date: str = ""
    email: str = ""


class ReferenceCreate(BaseModel):
    """Request payload for registering a reference entry."""

    name: str = ""
    location: str = ""
    period: str = ""
