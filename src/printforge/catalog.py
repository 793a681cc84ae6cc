"""Read-only material catalog used to resolve material ids."""

from typing import Dict, Iterable, Iterator, List, Optional

from printforge.exceptions import ColorNotFoundError, MaterialNotFoundError
from printforge.models.material import Material, MaterialColor
from printforge.profiles import default_materials


class MaterialCatalog:
    """
    Materials keyed by id.

    The catalog is reference data supplied by the material provider. It is
    never mutated by quoting or the cart, and lookups never substitute a
    default material for a missing id.
    """

    def __init__(self, materials: Iterable[Material]) -> None:
        """
        Initialize the catalog.

        Args:
            materials: Materials in display order

        Raises:
            ValueError: If two materials share an id
        """
        self._materials: Dict[str, Material] = {}
        for material in materials:
            if material.id in self._materials:
                raise ValueError(f"duplicate material id: {material.id!r}")
            self._materials[material.id] = material

    @classmethod
    def default(cls) -> "MaterialCatalog":
        """Catalog of the preset materials."""
        return cls(default_materials())

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self) -> Iterator[Material]:
        return iter(self._materials.values())

    def __contains__(self, material_id: object) -> bool:
        return material_id in self._materials

    def find(self, material_id: str) -> Optional[Material]:
        """Return the material with this id, or None."""
        return self._materials.get(material_id)

    def get(self, material_id: str) -> Material:
        """
        Return the material with this id.

        Raises:
            MaterialNotFoundError: If no material has this id
        """
        material = self._materials.get(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)
        return material

    def get_color(self, material_id: str, color: str) -> MaterialColor:
        """
        Return a color offered by a material.

        Raises:
            MaterialNotFoundError: If no material has this id
            ColorNotFoundError: If the material does not offer the color
        """
        found = self.get(material_id).color(color)
        if found is None:
            raise ColorNotFoundError(material_id, color)
        return found

    def ids(self) -> List[str]:
        return list(self._materials)
