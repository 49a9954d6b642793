"""Domain fixtures shared by the test suite."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Planet(str, Enum):
    EARTH = "earth"
    TURO = "turo"


class User(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str] = None
    age: Optional[int] = None
    planet: Planet = Planet.EARTH
    inserted_at: Optional[datetime] = None


class CreateUserParams(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    age: Optional[int] = None


@dataclass
class Pet:
    name: str
    species: str
    weight: float
