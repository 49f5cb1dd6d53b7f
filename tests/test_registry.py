"""エンティティ登録簿（EntityRegistry）のテスト."""

from __future__ import annotations

import gc
import weakref
from functools import partial

import numpy as np
import pytest

from mpm_core.node import Node
from mpm_core.registry import EntityRegistry

TOL = 1e-7


def _nodes(ndim: int, dof: int, ids=(0, 1)) -> list[Node]:
    return [Node(i, np.zeros(ndim), dof) for i in ids]


class TestInsert:
    """登録と登録数."""

    @pytest.mark.parametrize("ndim, dof", [(2, 2), (3, 6)])
    def test_insert_two(self, ndim, dof):
        node1, node2 = _nodes(ndim, dof)
        registry = EntityRegistry()
        assert registry.insert(node1) is True
        assert registry.insert(node2, node2.id) is True
        assert registry.size() == 2
        assert len(registry) == 2

    def test_duplicate_rejected(self):
        """同一識別子の二重登録は False、登録数は変化しない."""
        node = Node(7, np.zeros(2), 2)
        registry = EntityRegistry()
        assert registry.insert(node) is True
        assert registry.insert(node) is False
        assert registry.size() == 1

    def test_duplicate_keeps_first(self):
        first = Node(7, np.zeros(2), 2)
        second = Node(7, np.ones(2), 2)
        registry = EntityRegistry()
        registry.insert(first)
        assert registry.insert(second) is False
        [(_, stored)] = list(registry)
        assert stored is first

    def test_explicit_identity(self):
        """明示した識別子は entity.id と異なってよい."""
        node = Node(0, np.zeros(2), 2)
        registry = EntityRegistry()
        assert registry.insert(node, 42) is True
        assert 42 in registry
        assert 0 not in registry
        assert registry.insert(Node(42, np.zeros(2), 2)) is False

    def test_same_entity_under_two_identities(self):
        node = Node(0, np.zeros(2), 2)
        registry = EntityRegistry()
        assert registry.insert(node) is True
        assert registry.insert(node, identity=1) is True
        assert registry.size() == 2

    @pytest.mark.parametrize("identity", [-1, 2.5, False])
    def test_invalid_identity(self, identity):
        registry = EntityRegistry()
        with pytest.raises(ValueError, match="identity"):
            registry.insert(Node(0, np.zeros(2), 2), identity)
        assert registry.size() == 0

    def test_empty(self):
        registry = EntityRegistry()
        assert registry.size() == 0
        assert list(registry) == []
        assert registry.identities() == []

    def test_verbose_duplicate(self, capsys):
        registry = EntityRegistry(verbose=True)
        node = Node(3, np.zeros(2), 2)
        registry.insert(node)
        assert capsys.readouterr().out == ""
        registry.insert(node)
        assert "id=3" in capsys.readouterr().out


class TestIteration:
    """識別子昇順の反復."""

    def test_ascending_order(self):
        """挿入順に依らず識別子昇順."""
        ids = [5, 3, 9, 0, 12, 7, 1]
        registry = EntityRegistry()
        for node in _nodes(2, 2, ids):
            registry.insert(node)
        pairs = list(registry.items())
        assert len(pairs) == len(ids)
        assert [i for i, _ in pairs] == sorted(ids)
        assert all(i == node.id for i, node in pairs)
        assert registry.identities() == sorted(ids)

    def test_many_distinct(self):
        rng = np.random.default_rng(4)
        ids = rng.permutation(200)
        registry = EntityRegistry()
        for i in ids:
            assert registry.insert(Node(int(i), np.zeros(3), 3))
        assert registry.size() == 200
        got = [i for i, _ in registry]
        assert got == list(range(200))

    def test_restartable(self):
        registry = EntityRegistry()
        for node in _nodes(2, 2, [2, 1]):
            registry.insert(node)
        assert list(registry) == list(registry)
        assert len(list(registry.items())) == 2

    def test_lazy(self):
        registry = EntityRegistry()
        for node in _nodes(2, 2, [0, 1]):
            registry.insert(node)
        it = iter(registry)
        assert next(it)[0] == 0
        assert next(it)[0] == 1
        with pytest.raises(StopIteration):
            next(it)

    @pytest.mark.parametrize("ndim, dof", [(2, 2), (3, 6)])
    def test_coordinates_zero(self, ndim, dof):
        registry = EntityRegistry()
        for node in _nodes(ndim, dof):
            registry.insert(node)
        counter = 0
        for _, node in registry:
            np.testing.assert_allclose(node.coordinates, 0.0, atol=TOL)
            counter += 1
        assert counter == 2


class TestForEach:
    """for_each による一括更新."""

    @pytest.mark.parametrize("ndim, dof", [(2, 2), (3, 6)])
    def test_set_coordinates(self, ndim, dof):
        """座標を一括で 1 に更新し、後続の反復で確認する."""
        registry = EntityRegistry()
        for node in _nodes(ndim, dof):
            registry.insert(node)
        for _, node in registry:
            np.testing.assert_allclose(node.coordinates, 0.0, atol=TOL)

        coords = np.ones(ndim)
        registry.for_each(partial(Node.assign_coordinates, coordinates=coords))

        pairs = list(registry)
        assert len(pairs) == 2
        for _, node in pairs:
            np.testing.assert_allclose(node.coordinates, 1.0, atol=TOL)

    def test_receives_entity_in_order(self):
        registry = EntityRegistry()
        for node in _nodes(2, 2, [4, 2, 8]):
            registry.insert(node)
        seen = []
        registry.for_each(lambda n: seen.append(n.id))
        assert seen == [2, 4, 8]

    def test_field_constant(self):
        registry = EntityRegistry()
        for node in _nodes(3, 6, range(5)):
            registry.insert(node)
        registry.for_each(lambda n: n.assign_velocity(np.full(6, -2.0)))
        registry.for_each(lambda n: n.assign_mass(3.0))
        for _, node in registry:
            np.testing.assert_allclose(node.velocity, -2.0)
            assert node.mass == pytest.approx(3.0)

    def test_external_reference_sees_update(self):
        """登録簿は参照を保持する（コピーしない）."""
        node = Node(0, np.zeros(2), 2)
        registry = EntityRegistry()
        registry.insert(node)
        registry.for_each(lambda n: n.assign_force(np.array([1.0, -1.0])))
        np.testing.assert_allclose(node.force, [1.0, -1.0])

    def test_show_progress(self, capsys):
        registry = EntityRegistry()
        for node in _nodes(2, 2, range(3)):
            registry.insert(node)
        registry.for_each(lambda n: None, show_progress=True)
        assert "[for_each] n=3" in capsys.readouterr().out


class TestOwnership:
    """共有所有."""

    def test_node_outlives_registry(self):
        node = Node(0, np.zeros(2), 2)
        registry = EntityRegistry()
        registry.insert(node)
        del registry
        gc.collect()
        node.assign_mass(1.0)
        assert node.mass == 1.0

    def test_registry_keeps_node_alive(self):
        registry = EntityRegistry()
        node = Node(0, np.zeros(2), 2)
        ref = weakref.ref(node)
        registry.insert(node)
        del node
        gc.collect()
        assert ref() is not None
        del registry
        gc.collect()
        assert ref() is None


def test_end_to_end_two_nodes():
    """空の登録簿に 2 節点を登録し、座標を (1, 1) に一括更新する."""
    registry = EntityRegistry()
    registry.insert(Node(0, np.zeros(2), 2))
    registry.insert(Node(1, np.zeros(2), 2))
    registry.for_each(lambda n: n.assign_coordinates(np.array([1.0, 1.0])))
    pairs = list(registry)
    assert [i for i, _ in pairs] == [0, 1]
    for _, node in pairs:
        np.testing.assert_allclose(node.coordinates, [1.0, 1.0])
