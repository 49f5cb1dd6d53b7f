"""登録対象エンティティの抽象インタフェース定義.

EntityRegistry に格納される節点・セル・粒子などは、
呼び出し側が生成時に与えた識別子 ``id`` を持つ。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class EntityProtocol(Protocol):
    """識別子を持つシミュレーション実体.

    Attributes:
        id: 非負整数の識別子。生成時に呼び出し側が割り当て、以後変化しない。

    適合クラス例:
      - Node
    """

    @property
    def id(self) -> int: ...
