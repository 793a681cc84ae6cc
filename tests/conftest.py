"""Shared fixtures for pricing and cart tests."""

import pytest

from printforge.models import Dimensions, ProductRef, UploadedModel
from printforge.profiles import MaterialType, create_material


@pytest.fixture
def pla():
    """PLA at 0.05 per cm³, no premium colors."""
    return create_material(MaterialType.PLA)


@pytest.fixture
def petg():
    """PETG at 0.07 per cm³."""
    return create_material(MaterialType.PETG)


@pytest.fixture
def resin():
    """Resin at 0.12 per cm³ with a premium Clear color (+5)."""
    return create_material(MaterialType.RESIN)


@pytest.fixture
def vase():
    """Catalog product priced at 25."""
    return ProductRef(id="prod-vase", name="Spiral Vase", price=25.0, images=("vase.jpg",))


@pytest.fixture
def bracket():
    """Uploaded model of 50 cm³."""
    return UploadedModel(
        id="model-bracket",
        file_name="bracket.stl",
        volume_cm3=50.0,
        dimensions=Dimensions(x=2.0, y=5.0, z=5.0),
    )
