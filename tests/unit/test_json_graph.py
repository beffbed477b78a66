"""Unit tests for identity-preserving JSON graph encoding."""
import pytest
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from imis.adapters.json_graph import GraphEncoder, NodeSpec


class Colour(str, Enum):
    RED = "RED"


@dataclass(eq=False)
class Owner:
    id: str
    display_name: str
    pets: List["Pet"] = field(default_factory=list)


@dataclass(eq=False)
class Pet:
    id: int
    owner: Optional[Owner] = None
    colour: Optional[Colour] = None
    born_on: Optional[date] = None


@pytest.fixture
def encoder():
    return GraphEncoder({
        Owner: NodeSpec(("id", "display_name", "pets")),
        Pet: NodeSpec(("id", "owner", "colour", "born_on")),
    })


def make_owner_with_pet():
    owner = Owner(id="o-1", display_name="Ana")
    pet = Pet(id=1, owner=owner, colour=Colour.RED, born_on=date(2019, 5, 1))
    owner.pets.append(pet)
    return owner, pet


def test_back_reference_is_emitted_as_identity(encoder):
    owner, _ = make_owner_with_pet()

    encoded = encoder.encode(owner)

    assert encoded == {
        "id": "o-1",
        "displayName": "Ana",
        "pets": [{"id": 1, "owner": "o-1", "colour": "RED", "bornOn": "2019-05-01"}],
    }


def test_root_entered_from_the_other_side(encoder):
    _, pet = make_owner_with_pet()

    encoded = encoder.encode(pet)

    assert encoded["owner"] == {"id": "o-1", "displayName": "Ana", "pets": [1]}


def test_shared_entity_is_emitted_in_full_once_across_roots(encoder):
    owner = Owner(id="o-1", display_name="Ana")
    first = Pet(id=1, owner=owner)
    second = Pet(id=2, owner=owner)

    encoded = encoder.encode_many([first, second])

    assert encoded[0]["owner"]["id"] == "o-1"
    assert encoded[1]["owner"] == "o-1"


def test_identity_scope_is_per_type(encoder):
    owner = Owner(id="1", display_name="Ana")
    pet = Pet(id=1, owner=None)

    encoded = encoder.encode_many([owner, pet])

    assert encoded[1] == {"id": 1, "owner": None, "colour": None, "bornOn": None}


def test_missing_identity_is_rejected(encoder):
    with pytest.raises(ValueError, match="no 'id'"):
        encoder.encode(Pet(id=None))


def test_distinct_objects_with_same_identity_are_rejected(encoder):
    owner = Owner(id="o-1", display_name="Ana")
    impostor = Owner(id="o-1", display_name="Someone else")

    with pytest.raises(ValueError, match="share identity"):
        encoder.encode_many([owner, impostor])


def test_plain_values_are_converted(encoder):
    timestamp = datetime(2020, 3, 21, 10, 30, tzinfo=timezone.utc)
    encoded = encoder.encode([timestamp, Colour.RED, 3, None, ["x"]])

    assert encoded == ["2020-03-21T10:30:00+00:00", "RED", 3, None, ["x"]]
