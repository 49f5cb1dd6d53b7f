"""背景格子の節点.

節点は座標と、自由度数 dof 長の節点場（力・速度・運動量・加速度）、
および質量を保持する。空間次元 ndim は生成時の座標ベクトル長で決まり、
dof とは独立（回転自由度を含む場合など dof > ndim もありうる）。

各場の更新はドライバ・構成則側からの assign_* による丸ごとの置き換えのみ。
派生量・キャッシュは持たない。
"""

from __future__ import annotations

import numpy as np

# 質量未設定を表す番兵値（最大の有限倍精度浮動小数点数）
MASS_UNSET = float(np.finfo(np.float64).max)


class Node:
    """節点.

    Attributes:
        id: 識別子（非負整数、読み取り専用）
        ndim: 空間次元（読み取り専用）
        dof: 自由度数（読み取り専用）
        coordinates: (ndim,) 座標
        mass: 質量（初期値 MASS_UNSET）
        force: (dof,) 節点力
        velocity: (dof,) 速度
        momentum: (dof,) 運動量
        acceleration: (dof,) 加速度

    プロパティはコピーを返す。値の変更は assign_* を使う。
    """

    def __init__(self, index: int, coordinates: np.ndarray, dof: int) -> None:
        """
        Args:
            index: 識別子（非負整数）
            coordinates: (ndim,) 初期座標
            dof: 自由度数（1 以上）
        """
        if isinstance(index, bool) or int(index) != index or index < 0:
            raise ValueError(f"節点 id は非負整数が必要。実際: {index!r}")
        if isinstance(dof, bool) or int(dof) != dof or dof < 1:
            raise ValueError(f"dof は 1 以上の整数が必要。実際: {dof!r}")
        coords = np.array(coordinates, dtype=float)
        if coords.ndim != 1 or coords.size == 0:
            raise ValueError(f"coordinates は (ndim,) が必要。実際: {coords.shape}")

        self._id = int(index)
        self._dof = int(dof)
        self._coordinates = coords
        self._mass = MASS_UNSET
        self._force = np.zeros(self._dof, dtype=float)
        self._velocity = np.zeros(self._dof, dtype=float)
        self._momentum = np.zeros(self._dof, dtype=float)
        self._acceleration = np.zeros(self._dof, dtype=float)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(id={self._id}, "
            f"coordinates={self._coordinates}, dof={self._dof})"
        )

    @property
    def id(self) -> int:
        """識別子."""
        return self._id

    @property
    def ndim(self) -> int:
        """空間次元."""
        return self._coordinates.size

    @property
    def dof(self) -> int:
        """自由度数."""
        return self._dof

    # -- 読み出し ------------------------------------------------

    @property
    def coordinates(self) -> np.ndarray:
        return self._coordinates.copy()

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def force(self) -> np.ndarray:
        return self._force.copy()

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    @property
    def momentum(self) -> np.ndarray:
        return self._momentum.copy()

    @property
    def acceleration(self) -> np.ndarray:
        return self._acceleration.copy()

    # -- 代入（丸ごと置き換え）------------------------------------

    def assign_coordinates(self, coordinates: np.ndarray) -> None:
        """座標を置き換える."""
        self._coordinates = self._checked(coordinates, self.ndim, "coordinates")

    def assign_mass(self, mass: float) -> None:
        """質量を置き換える."""
        self._mass = float(mass)

    def assign_force(self, force: np.ndarray) -> None:
        """節点力を置き換える."""
        self._force = self._checked(force, self._dof, "force")

    def assign_velocity(self, velocity: np.ndarray) -> None:
        """速度を置き換える."""
        self._velocity = self._checked(velocity, self._dof, "velocity")

    def assign_momentum(self, momentum: np.ndarray) -> None:
        """運動量を置き換える."""
        self._momentum = self._checked(momentum, self._dof, "momentum")

    def assign_acceleration(self, acceleration: np.ndarray) -> None:
        """加速度を置き換える."""
        self._acceleration = self._checked(acceleration, self._dof, "acceleration")

    @staticmethod
    def _checked(values: np.ndarray, size: int, name: str) -> np.ndarray:
        arr = np.array(values, dtype=float)
        if arr.shape != (size,):
            raise ValueError(f"{name} は ({size},) が必要。実際: {arr.shape}")
        return arr
