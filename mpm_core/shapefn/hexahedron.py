"""六面体要素の形状関数 — H8 / H20.

== 節点順序（自然座標 ξ, η, ζ）==

頂点:
  0: (-1,-1,-1)  1: (+1,-1,-1)  2: (+1,+1,-1)  3: (-1,+1,-1)
  4: (-1,-1,+1)  5: (+1,-1,+1)  6: (+1,+1,+1)  7: (-1,+1,+1)

辺中点（H20, Abaqus C3D20 と同順）:
   8: 0-1   9: 1-2  10: 2-3  11: 3-0   下面
  12: 4-5  13: 5-6  14: 6-7  15: 7-4   上面
  16: 0-4  17: 1-5  18: 2-6  19: 3-7   鉛直辺

== 定式化 ==

H8（三重一次）:
  N_i = 1/8 (1 + ξ_i ξ)(1 + η_i η)(1 + ζ_i ζ)

H20（セレンディピティ二次）:
  頂点:          N_i = 1/8 (1 + ξ_i ξ)(1 + η_i η)(1 + ζ_i ζ)(ξ_i ξ + η_i η + ζ_i ζ - 2)
  辺中点 (ξ_i=0): N_i = 1/4 (1 - ξ²)(1 + η_i η)(1 + ζ_i ζ)   （η, ζ も同様）
"""

from __future__ import annotations

import numpy as np

from mpm_core.shapefn.base import ShapeFunction

# ============================================================
# 参照節点座標
# ============================================================

_CORNERS = [
    (-1.0, -1.0, -1.0),
    (+1.0, -1.0, -1.0),
    (+1.0, +1.0, -1.0),
    (-1.0, +1.0, -1.0),
    (-1.0, -1.0, +1.0),
    (+1.0, -1.0, +1.0),
    (+1.0, +1.0, +1.0),
    (-1.0, +1.0, +1.0),
]
_EDGES = [
    # 下面 (ζ = -1)
    (0.0, -1.0, -1.0),
    (+1.0, 0.0, -1.0),
    (0.0, +1.0, -1.0),
    (-1.0, 0.0, -1.0),
    # 上面 (ζ = +1)
    (0.0, -1.0, +1.0),
    (+1.0, 0.0, +1.0),
    (0.0, +1.0, +1.0),
    (-1.0, 0.0, +1.0),
    # 鉛直辺
    (-1.0, -1.0, 0.0),
    (+1.0, -1.0, 0.0),
    (+1.0, +1.0, 0.0),
    (-1.0, +1.0, 0.0),
]

_HEX_REFERENCE = {
    8: np.array(_CORNERS, dtype=float),
    20: np.array(_CORNERS + _EDGES, dtype=float),
}

_HEX20_EDGE_NODES = _HEX_REFERENCE[20][8:]


# ============================================================
# H8
# ============================================================


def _hex8_shape(xi: float, eta: float, zeta: float) -> np.ndarray:
    """H8 形状関数 N_i (i=0..7)."""
    xm, xp = 1.0 - xi, 1.0 + xi
    em, ep = 1.0 - eta, 1.0 + eta
    zm, zp = 1.0 - zeta, 1.0 + zeta
    return 0.125 * np.array(
        [
            xm * em * zm,
            xp * em * zm,
            xp * ep * zm,
            xm * ep * zm,
            xm * em * zp,
            xp * em * zp,
            xp * ep * zp,
            xm * ep * zp,
        ]
    )


def _hex8_dNdxi(xi: float, eta: float, zeta: float) -> np.ndarray:
    """H8 形状関数の自然座標微分.

    Returns:
        dN: (8, 3) — 各行 [dN/dξ, dN/dη, dN/dζ]
    """
    xm, xp = 1.0 - xi, 1.0 + xi
    em, ep = 1.0 - eta, 1.0 + eta
    zm, zp = 1.0 - zeta, 1.0 + zeta
    return 0.125 * np.array(
        [
            [-em * zm, -xm * zm, -xm * em],
            [+em * zm, -xp * zm, -xp * em],
            [+ep * zm, +xp * zm, -xp * ep],
            [-ep * zm, +xm * zm, -xm * ep],
            [-em * zp, -xm * zp, +xm * em],
            [+em * zp, -xp * zp, +xp * em],
            [+ep * zp, +xp * zp, +xp * ep],
            [-ep * zp, +xm * zp, +xm * ep],
        ]
    )


# ============================================================
# H20
# ============================================================


def _hex20_shape(xi: float, eta: float, zeta: float) -> np.ndarray:
    """H20 形状関数 N_i (i=0..19)."""
    x = np.array([xi, eta, zeta])
    N = np.empty(20, dtype=float)

    # 頂点
    a = _HEX_REFERENCE[8] * x  # (8, 3): ξ_i ξ, η_i η, ζ_i ζ
    N[:8] = 0.125 * np.prod(1.0 + a, axis=1) * (a.sum(axis=1) - 2.0)

    # 辺中点: 節点座標が 0 の軸は (1 - s²)、それ以外は (1 + s_i s)
    mask = _HEX20_EDGE_NODES == 0.0
    factors = np.where(mask, 1.0 - x * x, 1.0 + _HEX20_EDGE_NODES * x)
    N[8:] = 0.25 * np.prod(factors, axis=1)
    return N


def _prod_others(f: np.ndarray) -> np.ndarray:
    """各列について、その列を除く 2 列の積 (n, 3)."""
    return np.column_stack([f[:, 1] * f[:, 2], f[:, 0] * f[:, 2], f[:, 0] * f[:, 1]])


def _hex20_dNdxi(xi: float, eta: float, zeta: float) -> np.ndarray:
    """H20 形状関数の自然座標微分 (20, 3)."""
    x = np.array([xi, eta, zeta])
    dN = np.empty((20, 3), dtype=float)

    # 頂点: ∂/∂ξ = 1/8 ξ_i (1 + η_i η)(1 + ζ_i ζ)(2 ξ_i ξ + η_i η + ζ_i ζ - 1)
    corners = _HEX_REFERENCE[8]
    a = corners * x
    s = a.sum(axis=1, keepdims=True)
    dN[:8] = 0.125 * corners * _prod_others(1.0 + a) * (a + s - 1.0)

    # 辺中点
    mask = _HEX20_EDGE_NODES == 0.0
    factors = np.where(mask, 1.0 - x * x, 1.0 + _HEX20_EDGE_NODES * x)
    dfactors = np.where(mask, -2.0 * x, _HEX20_EDGE_NODES)
    dN[8:] = 0.25 * dfactors * _prod_others(factors)
    return dN


_HEX_SHAPE = {8: _hex8_shape, 20: _hex20_shape}
_HEX_DNDXI = {8: _hex8_dNdxi, 20: _hex20_dNdxi}


class HexahedronShapeFunction(ShapeFunction):
    """六面体要素の形状関数（3D, 8/20 節点）.

    nfunctions に 8, 20 以外を指定すると生成時に ValueError を送出する。
    """

    ndim = 3
    _SUPPORTED = (8, 20)
    _REFERENCE = _HEX_REFERENCE
    _NAME = "六面体"

    def _evaluate_N(self, xi: np.ndarray) -> np.ndarray:
        return _HEX_SHAPE[self._nfunctions](xi[0], xi[1], xi[2])

    def _evaluate_dN(self, xi: np.ndarray) -> np.ndarray:
        return _HEX_DNDXI[self._nfunctions](xi[0], xi[1], xi[2])
