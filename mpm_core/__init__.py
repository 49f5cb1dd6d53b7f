"""mpm_core — 物質点法（MPM）の節点登録簿と形状関数."""

from mpm_core.node import MASS_UNSET, Node
from mpm_core.registry import EntityRegistry
from mpm_core.shapefn import (
    HexahedronShapeFunction,
    QuadrilateralShapeFunction,
    ShapeFunction,
    create_shapefn,
)

__all__ = [
    "Node",
    "MASS_UNSET",
    "EntityRegistry",
    "ShapeFunction",
    "QuadrilateralShapeFunction",
    "HexahedronShapeFunction",
    "create_shapefn",
]
