"""Shared fixtures for store tests."""

from __future__ import annotations

import pytest

from contextstore import Store, restrict


class Profile(Store):
    name = restrict(default="Ann")
    secret = restrict("none", default="hunter2")
    id = restrict("r", default=7)
    compute = restrict(default=lambda: 42)


@pytest.fixture
def profile() -> Profile:
    return Profile()


@pytest.fixture
def inner() -> Store:
    return Store({"name": "inner", "secret": "s3"}, permissions={"secret": "none"})
