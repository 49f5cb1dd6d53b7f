"""四辺形要素の形状関数 — Q4 / Q8 / Q9.

== 節点順序（自然座標 ξ, η）==

  3 ---- 6 ---- 2
  |             |
  7      8      5
  |             |
  0 ---- 4 ---- 1

  0: (-1,-1)  1: (+1,-1)  2: (+1,+1)  3: (-1,+1)   頂点
  4: ( 0,-1)  5: (+1, 0)  6: ( 0,+1)  7: (-1, 0)   辺中点（Q8, Q9）
  8: ( 0, 0)                                       中心（Q9）

== 定式化 ==

Q4（双一次）:
  N_i = 1/4 (1 + ξ_i ξ)(1 + η_i η)

Q8（セレンディピティ二次）:
  辺中点: N = 1/2 (1 - ξ²)(1 + η_i η)  または  1/2 (1 + ξ_i ξ)(1 - η²)
  頂点:   N = N^Q4 - 1/2 (隣接する2つの辺中点関数の和)

Q9（双二次 Lagrange）:
  1D 二次 Lagrange 基底（節点 -1, 0, +1）のテンソル積
    l_-(s) = s(s - 1)/2,  l_0(s) = 1 - s²,  l_+(s) = s(s + 1)/2
"""

from __future__ import annotations

import numpy as np

from mpm_core.shapefn.base import ShapeFunction

# ============================================================
# 参照節点座標
# ============================================================

_CORNERS = [(-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0)]
_MIDSIDES = [(0.0, -1.0), (1.0, 0.0), (0.0, 1.0), (-1.0, 0.0)]
_CENTER = [(0.0, 0.0)]

_QUAD_REFERENCE = {
    4: np.array(_CORNERS, dtype=float),
    8: np.array(_CORNERS + _MIDSIDES, dtype=float),
    9: np.array(_CORNERS + _MIDSIDES + _CENTER, dtype=float),
}

# 頂点 i に隣接する辺中点（Q8 の頂点補正用、4始まりの節点番号）
_Q8_ADJACENT_MIDSIDES = [(4, 7), (4, 5), (5, 6), (6, 7)]

# Q9: 節点ごとの 1D 基底インデックス（0: s=-1, 1: s=0, 2: s=+1）
_Q9_IX = np.array([0, 2, 2, 0, 1, 2, 1, 0, 1])
_Q9_IY = np.array([0, 0, 2, 2, 0, 1, 2, 1, 1])


# ============================================================
# Q4
# ============================================================


def _quad4_shape(xi: float, eta: float) -> np.ndarray:
    """Q4 形状関数 N_i (i=0..3)."""
    xm, xp = 1.0 - xi, 1.0 + xi
    em, ep = 1.0 - eta, 1.0 + eta
    return 0.25 * np.array([xm * em, xp * em, xp * ep, xm * ep])


def _quad4_dNdxi(xi: float, eta: float) -> np.ndarray:
    """Q4 形状関数の自然座標微分.

    Returns:
        dN: (4, 2) — [:, 0] = dN/dξ, [:, 1] = dN/dη
    """
    xm, xp = 1.0 - xi, 1.0 + xi
    em, ep = 1.0 - eta, 1.0 + eta
    return 0.25 * np.array(
        [
            [-em, -xm],
            [+em, -xp],
            [+ep, +xp],
            [-ep, +xm],
        ]
    )


# ============================================================
# Q8
# ============================================================


def _quad8_shape(xi: float, eta: float) -> np.ndarray:
    """Q8 形状関数 N_i (i=0..7)."""
    N = np.empty(8, dtype=float)
    # 辺中点
    N[4] = 0.5 * (1.0 - xi * xi) * (1.0 - eta)
    N[5] = 0.5 * (1.0 + xi) * (1.0 - eta * eta)
    N[6] = 0.5 * (1.0 - xi * xi) * (1.0 + eta)
    N[7] = 0.5 * (1.0 - xi) * (1.0 - eta * eta)
    # 頂点: 双一次 - 隣接辺中点の半分
    N[:4] = _quad4_shape(xi, eta)
    for i, (a, b) in enumerate(_Q8_ADJACENT_MIDSIDES):
        N[i] -= 0.5 * (N[a] + N[b])
    return N


def _quad8_dNdxi(xi: float, eta: float) -> np.ndarray:
    """Q8 形状関数の自然座標微分 (8, 2)."""
    dN = np.empty((8, 2), dtype=float)
    dN[4] = [-xi * (1.0 - eta), -0.5 * (1.0 - xi * xi)]
    dN[5] = [0.5 * (1.0 - eta * eta), -(1.0 + xi) * eta]
    dN[6] = [-xi * (1.0 + eta), 0.5 * (1.0 - xi * xi)]
    dN[7] = [-0.5 * (1.0 - eta * eta), -(1.0 - xi) * eta]
    dN[:4] = _quad4_dNdxi(xi, eta)
    for i, (a, b) in enumerate(_Q8_ADJACENT_MIDSIDES):
        dN[i] -= 0.5 * (dN[a] + dN[b])
    return dN


# ============================================================
# Q9
# ============================================================


def _lagrange2(s: float) -> np.ndarray:
    """1D 二次 Lagrange 基底 [l_-, l_0, l_+]."""
    return np.array([0.5 * s * (s - 1.0), 1.0 - s * s, 0.5 * s * (s + 1.0)])


def _lagrange2_ds(s: float) -> np.ndarray:
    """1D 二次 Lagrange 基底の微分."""
    return np.array([s - 0.5, -2.0 * s, s + 0.5])


def _quad9_shape(xi: float, eta: float) -> np.ndarray:
    """Q9 形状関数 N_i (i=0..8)."""
    return _lagrange2(xi)[_Q9_IX] * _lagrange2(eta)[_Q9_IY]


def _quad9_dNdxi(xi: float, eta: float) -> np.ndarray:
    """Q9 形状関数の自然座標微分 (9, 2)."""
    lx, ly = _lagrange2(xi)[_Q9_IX], _lagrange2(eta)[_Q9_IY]
    dlx, dly = _lagrange2_ds(xi)[_Q9_IX], _lagrange2_ds(eta)[_Q9_IY]
    return np.column_stack([dlx * ly, lx * dly])


_QUAD_SHAPE = {4: _quad4_shape, 8: _quad8_shape, 9: _quad9_shape}
_QUAD_DNDXI = {4: _quad4_dNdxi, 8: _quad8_dNdxi, 9: _quad9_dNdxi}


class QuadrilateralShapeFunction(ShapeFunction):
    """四辺形要素の形状関数（2D, 4/8/9 節点）.

    nfunctions に 4, 8, 9 以外を指定すると生成時に ValueError を送出する。
    位相は生成後に変更できない。

    Example:
        >>> sf = QuadrilateralShapeFunction(4)
        >>> sf.shapefn(np.zeros(2))
        array([0.25, 0.25, 0.25, 0.25])
    """

    ndim = 2
    _SUPPORTED = (4, 8, 9)
    _REFERENCE = _QUAD_REFERENCE
    _NAME = "四辺形"

    def _evaluate_N(self, xi: np.ndarray) -> np.ndarray:
        return _QUAD_SHAPE[self._nfunctions](xi[0], xi[1])

    def _evaluate_dN(self, xi: np.ndarray) -> np.ndarray:
        return _QUAD_DNDXI[self._nfunctions](xi[0], xi[1])
