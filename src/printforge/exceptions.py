"""Exception types raised by the pricing and cart library."""


class PrintforgeError(Exception):
    """Base class for all library errors."""


class MaterialNotFoundError(PrintforgeError, LookupError):
    """Raised when a material id is not present in the catalog."""

    def __init__(self, material_id: str) -> None:
        super().__init__(f"Material not found: {material_id!r}")
        self.material_id = material_id


class ColorNotFoundError(PrintforgeError, LookupError):
    """Raised when a color name is not offered by a material."""

    def __init__(self, material_id: str, color: str) -> None:
        super().__init__(f"Color {color!r} is not offered for material {material_id!r}")
        self.material_id = material_id
        self.color = color


class InvalidLineItemError(PrintforgeError, ValueError):
    """Raised when a line item does not reference exactly one source."""


class CartPayloadError(PrintforgeError, ValueError):
    """Raised when a persisted cart payload cannot be decoded."""


class UnsupportedPayloadVersion(CartPayloadError):
    """Raised when a persisted cart payload has an unknown schema version."""

    def __init__(self, version: object) -> None:
        super().__init__(f"Unsupported cart payload version: {version!r}")
        self.version = version
