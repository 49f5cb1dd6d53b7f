"""形状関数の抽象インタフェース定義.

Protocol 階層:
  ShapeFunctionProtocol  — 自然座標における形状関数値と自然座標勾配の評価

形状関数は自然座標 xi だけの純関数として評価される。
全体座標系への写像（Jacobian 逆行列の適用）は呼び出し側（セル・要素）の責務。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class ShapeFunctionProtocol(Protocol):
    """アイソパラメトリック要素の形状関数の共通インタフェース.

    Attributes:
        ndim: 空間次元（四辺形=2, 六面体=3）。クラスごとに固定。
        nfunctions: 形状関数の数（Q4=4, Q8=8, Q9=9, H8=8, H20=20）。生成時に固定。

    適合クラス例:
      - QuadrilateralShapeFunction  (2D, 4/8/9 節点)
      - HexahedronShapeFunction     (3D, 8/20 節点)
    """

    ndim: int
    nfunctions: int

    def shapefn(self, xi: np.ndarray) -> np.ndarray:
        """自然座標 xi における形状関数値を返す.

        参照領域 [-1, 1]^ndim 内では 1 の分割（総和 = 1）と
        Kronecker デルタ性（自節点で 1、他節点で 0）を満たす。
        領域外でもクランプせず多項式のまま評価する。

        Args:
            xi: (ndim,) 自然座標

        Returns:
            N: (nfunctions,) 形状関数値
        """
        ...

    def grad_shapefn(self, xi: np.ndarray) -> np.ndarray:
        """自然座標 xi における形状関数の自然座標勾配を返す.

        Args:
            xi: (ndim,) 自然座標

        Returns:
            dN: (nfunctions, ndim) — dN[i, k] = ∂N_i/∂ξ_k
        """
        ...

    def reference_coordinates(self) -> np.ndarray:
        """各形状関数に対応する参照節点の自然座標.

        Returns:
            (nfunctions, ndim) 参照節点座標（形状関数と同じ順序）
        """
        ...
