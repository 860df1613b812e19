from .assets import AssetHandle, AssetKind, AssetRegistry, AssetResolver
from .style import Style, parse_color
from . import constants

# graphics and primitives depend on the session, which depends on assets;
# import them from their modules directly.
__all__ = [
    "AssetHandle",
    "AssetKind",
    "AssetRegistry",
    "AssetResolver",
    "Style",
    "constants",
    "parse_color",
]
