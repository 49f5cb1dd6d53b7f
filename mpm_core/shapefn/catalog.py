"""要素タイプ名から形状関数オブジェクトを生成するカタログ.

セル定義（入力ファイル・メッシュ生成側）が持つ要素タイプ名を
形状関数クラスと節点数の組に解決する。
名前は大文字小文字を区別しない。Abaqus の連続体要素名も別名として受け付ける。
"""

from __future__ import annotations

from dataclasses import dataclass

from mpm_core.shapefn.base import ShapeFunction
from mpm_core.shapefn.hexahedron import HexahedronShapeFunction
from mpm_core.shapefn.quadrilateral import QuadrilateralShapeFunction


@dataclass(frozen=True)
class ElementType:
    """要素タイプの定義.

    Attributes:
        name: 正規名（"Q4" 等）
        shapefn_class: 形状関数クラス
        nfunctions: 形状関数の数
        aliases: 別名（Abaqus 要素名など）
    """

    name: str
    shapefn_class: type[ShapeFunction]
    nfunctions: int
    aliases: tuple[str, ...] = ()

    @property
    def ndim(self) -> int:
        """空間次元."""
        return self.shapefn_class.ndim

    def create(self) -> ShapeFunction:
        """形状関数オブジェクトを生成する."""
        return self.shapefn_class(self.nfunctions)


ELEMENT_TYPES: dict[str, ElementType] = {
    et.name: et
    for et in (
        ElementType("Q4", QuadrilateralShapeFunction, 4, ("CPE4", "CPS4")),
        ElementType("Q8", QuadrilateralShapeFunction, 8, ("CPE8", "CPS8")),
        ElementType("Q9", QuadrilateralShapeFunction, 9),
        ElementType("H8", HexahedronShapeFunction, 8, ("C3D8",)),
        ElementType("H20", HexahedronShapeFunction, 20, ("C3D20",)),
    )
}

_ALIASES: dict[str, str] = {
    alias: et.name for et in ELEMENT_TYPES.values() for alias in (et.name, *et.aliases)
}


def element_type(name: str) -> ElementType:
    """要素タイプ名を ElementType に解決する.

    Raises:
        ValueError: 未対応の要素タイプ名
    """
    key = name.strip().upper()
    if key not in _ALIASES:
        raise ValueError(f"未対応の要素タイプ: {name}。対応: {sorted(_ALIASES)}")
    return ELEMENT_TYPES[_ALIASES[key]]


def create_shapefn(name: str) -> ShapeFunction:
    """要素タイプ名から形状関数オブジェクトを生成する.

    Args:
        name: 要素タイプ名（"Q4", "q8", "C3D8" 等）

    Returns:
        対応する ShapeFunction インスタンス
    """
    return element_type(name).create()
