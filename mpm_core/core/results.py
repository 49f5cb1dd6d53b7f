"""メソッド戻り値の型定義.

複数の配列を返す公開メソッドの戻り値を NamedTuple で定義する。
名前付きアクセス（result.N）とタプルアンパッキング（N, dN = ...）の両方に対応する。
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np


class ShapeFunctionResult(NamedTuple):
    """形状関数の同時評価結果.

    Attributes:
        N: (nfunctions,) 形状関数値
        dN: (nfunctions, ndim) 自然座標勾配
    """

    N: np.ndarray
    dN: np.ndarray
