"""アイソパラメトリック要素の形状関数."""

from mpm_core.shapefn.base import ShapeFunction
from mpm_core.shapefn.catalog import (
    ELEMENT_TYPES,
    ElementType,
    create_shapefn,
    element_type,
)
from mpm_core.shapefn.hexahedron import HexahedronShapeFunction
from mpm_core.shapefn.quadrilateral import QuadrilateralShapeFunction

__all__ = [
    "ShapeFunction",
    "QuadrilateralShapeFunction",
    "HexahedronShapeFunction",
    "ElementType",
    "ELEMENT_TYPES",
    "element_type",
    "create_shapefn",
]
