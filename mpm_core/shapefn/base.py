"""形状関数の共通基底クラス.

位相（節点数）ごとの具象クラスは ``_SUPPORTED``・``_REFERENCE`` と
``_evaluate_N`` / ``_evaluate_dN`` だけを定義する。
出力バッファの確保・上書き、引数検証、位相数の検証はここで行う。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

import numpy as np

from mpm_core.core.results import ShapeFunctionResult


class ShapeFunction(ABC):
    """アイソパラメトリック形状関数の基底.

    生成時に nfunctions を検証し、以後変更しない。
    出力バッファ (nfunctions,) / (nfunctions, ndim) はインスタンスごとに保持し、
    評価のたびに上書きする（累積しない）。戻り値はバッファのコピー。

    未対応の nfunctions は生成時に ValueError を送出する。これは初期化時の
    構造的な設定誤り（要素位相の不整合）であり、実行時に回復すべき条件ではない。
    捕捉して別の位相で続行せず、設定を修正して再実行すること。

    同一インスタンスを複数スレッドから同時に評価してはならない。

    Attributes:
        ndim: 空間次元（サブクラスで固定）
        nfunctions: 形状関数の数
    """

    ndim: ClassVar[int]
    _SUPPORTED: ClassVar[tuple[int, ...]]
    _REFERENCE: ClassVar[dict[int, np.ndarray]]
    _NAME: ClassVar[str]

    def __init__(self, nfunctions: int) -> None:
        if nfunctions not in self._SUPPORTED:
            raise ValueError(
                f"{self._NAME}要素の形状関数数 nfunctions={nfunctions} は未定義です。"
                f"対応: {self._SUPPORTED}"
            )
        self._nfunctions = int(nfunctions)
        self._N = np.zeros(self._nfunctions, dtype=float)
        self._dN = np.zeros((self._nfunctions, self.ndim), dtype=float)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nfunctions={self._nfunctions})"

    @property
    def nfunctions(self) -> int:
        """形状関数の数."""
        return self._nfunctions

    def shapefn(self, xi: np.ndarray) -> np.ndarray:
        """形状関数値 N (nfunctions,)."""
        xi = self._check_xi(xi)
        self._N[:] = self._evaluate_N(xi)
        return self._N.copy()

    def grad_shapefn(self, xi: np.ndarray) -> np.ndarray:
        """自然座標勾配 dN (nfunctions, ndim)."""
        xi = self._check_xi(xi)
        self._dN[:, :] = self._evaluate_dN(xi)
        return self._dN.copy()

    def evaluate(self, xi: np.ndarray) -> ShapeFunctionResult:
        """形状関数値と自然座標勾配を同時に評価する.

        Returns:
            ShapeFunctionResult: (N, dN) の NamedTuple
        """
        return ShapeFunctionResult(N=self.shapefn(xi), dN=self.grad_shapefn(xi))

    def reference_coordinates(self) -> np.ndarray:
        """参照節点の自然座標 (nfunctions, ndim)."""
        return self._REFERENCE[self._nfunctions].copy()

    def _check_xi(self, xi: np.ndarray) -> np.ndarray:
        xi = np.asarray(xi, dtype=float)
        if xi.shape != (self.ndim,):
            raise ValueError(f"xi は ({self.ndim},) が必要。実際: {xi.shape}")
        return xi

    @abstractmethod
    def _evaluate_N(self, xi: np.ndarray) -> np.ndarray:
        """位相ごとの形状関数値 (nfunctions,)."""

    @abstractmethod
    def _evaluate_dN(self, xi: np.ndarray) -> np.ndarray:
        """位相ごとの自然座標勾配 (nfunctions, ndim)."""
