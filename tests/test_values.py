"""Tests for node classification helpers."""

from __future__ import annotations

import pytest

from contextstore import MISSING, InvalidPathError, NodeKind, Store, classify
from contextstore.values import get_child, index_of, set_child


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            ({}, NodeKind.STRUCTURE),
            ([1, 2], NodeKind.STRUCTURE),
            ("text", NodeKind.SCALAR),
            (0, NodeKind.SCALAR),
            (None, NodeKind.SCALAR),
            (True, NodeKind.SCALAR),
            (MISSING, NodeKind.MISSING),
            (lambda: 1, NodeKind.DEFERRED),
        ],
    )
    def test_kinds(self, value: object, kind: NodeKind) -> None:
        assert classify(value) is kind

    def test_store(self) -> None:
        assert classify(Store()) is NodeKind.STORE

    def test_callable_store_is_a_store(self) -> None:
        """A store that is also callable is still a boundary."""

        class CallableStore(Store):
            def __call__(self) -> None:
                return None

        assert classify(CallableStore()) is NodeKind.STORE


class TestMissing:
    """Tests for the MISSING sentinel."""

    def test_singleton_and_falsy(self) -> None:
        assert type(MISSING)() is MISSING
        assert not MISSING
        assert repr(MISSING) == "MISSING"


class TestChildAccess:
    """Tests for get_child / set_child."""

    def test_index_of(self) -> None:
        assert index_of("0") == 0
        assert index_of("12") == 12
        assert index_of("-1") is None
        assert index_of("a") is None
        assert index_of("") is None
        assert index_of("٣") is None

    def test_get_child(self) -> None:
        assert get_child({"a": 1}, "a") == 1
        assert get_child({"a": 1}, "b") is MISSING
        assert get_child(["x"], "0") == "x"
        assert get_child("text", "0") is MISSING
        assert get_child(MISSING, "a") is MISSING

    def test_set_child_scalar(self) -> None:
        with pytest.raises(InvalidPathError):
            set_child("text", "a", 1)
