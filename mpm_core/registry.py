"""識別子をキーとするエンティティの登録簿.

節点（およびセル・粒子）を識別子で一意に保持し、
識別子昇順の決定的な反復と一括更新（for_each）を提供する。

- 識別子はエンティティ生成時に呼び出し側が割り当てる。登録簿は採番しない。
- 同一識別子の二重登録は False を返して拒否する（例外にはしない）。
- 削除・識別子による検索は提供しない。
- 排他制御は行わない。反復中・for_each 中の登録は呼び出し側で防ぐこと。

登録簿はエンティティへの参照を保持するだけで所有権を独占しない。
外部で参照されているエンティティは、登録簿が破棄されても生存する。
"""

from __future__ import annotations

import bisect
import time
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class EntityRegistry(Generic[T]):
    """識別子 → エンティティの登録簿.

    Args:
        verbose: True で二重登録の拒否を表示する

    Example:
        >>> nodes = EntityRegistry()
        >>> nodes.insert(Node(0, np.zeros(2), dof=2))
        True
        >>> nodes.for_each(lambda n: n.assign_coordinates(np.ones(2)))
    """

    def __init__(self, *, verbose: bool = False) -> None:
        self._entities: dict[int, T] = {}
        self._ids: list[int] = []  # 昇順を維持
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size()})"

    def insert(self, entity: T, identity: int | None = None) -> bool:
        """エンティティを登録する.

        Args:
            entity: 登録するエンティティ
            identity: 登録キー。None なら entity.id を使う。
                entity.id と異なる値も指定できる。

        Returns:
            登録できたら True。識別子が登録済みなら False（登録簿は変化しない）。
        """
        if identity is None:
            identity = entity.id  # type: ignore[attr-defined]
        elif isinstance(identity, bool) or int(identity) != identity or identity < 0:
            raise ValueError(f"identity は非負整数が必要。実際: {identity!r}")
        identity = int(identity)

        if identity in self._entities:
            if self.verbose:
                print(f"[registry] id={identity} は登録済み。登録をスキップ。")
            return False
        self._entities[identity] = entity
        bisect.insort(self._ids, identity)
        return True

    def size(self) -> int:
        """登録数."""
        return len(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entities

    def identities(self) -> list[int]:
        """登録済み識別子（昇順）."""
        return list(self._ids)

    def items(self) -> Iterator[tuple[int, T]]:
        """(識別子, エンティティ) の組を識別子昇順に返すイテレータ.

        呼び出しごとに新しいイテレータを返すため、何度でも最初から反復できる。
        """
        for identity in self._ids:
            yield identity, self._entities[identity]

    def __iter__(self) -> Iterator[tuple[int, T]]:
        return self.items()

    def for_each(self, operation: Callable[[T], Any], *, show_progress: bool = False) -> None:
        """全エンティティに operation を識別子昇順で適用する.

        operation は (識別子, エンティティ) の組ではなくエンティティ本体を受け取る。
        戻り値は使用しない。

        Args:
            operation: 単項関数 f(entity)
            show_progress: 適用数と所要時間を表示
        """
        t0 = time.perf_counter()
        for identity in self._ids:
            operation(self._entities[identity])
        if show_progress:
            elapsed = time.perf_counter() - t0
            print(f"[for_each] n={len(self._ids)}, elapsed={elapsed:.3f} s")
