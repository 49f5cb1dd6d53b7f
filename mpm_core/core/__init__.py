"""mpm_core.core - エンティティ・形状関数の抽象インタフェース定義・戻り値型.

Protocol 階層:
  EntityProtocol         — 識別子（id）を持つ登録対象
  ShapeFunctionProtocol  — 形状関数値 + 自然座標勾配の評価
"""

from mpm_core.core.entity import EntityProtocol
from mpm_core.core.results import ShapeFunctionResult
from mpm_core.core.shapefn import ShapeFunctionProtocol

__all__ = [
    "EntityProtocol",
    "ShapeFunctionProtocol",
    "ShapeFunctionResult",
]
