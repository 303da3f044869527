"""Shared test fixtures."""

import pytest

from outline_tree.core.tree.parser import parse_text
from outline_tree.models.node import Forest
from tests.unit.fakes import CountingIds

# A(n1) > B(n2), C(n3) ; D(n4)
SIMPLE_TEXT = "A\n\tB\n\tC\nD"

# A(n1) > B(n2) > X(n3), Y(n4) ; C(n5) > Z(n6) ; D(n7)
NESTED_TEXT = "A\n\tB\n\t\tX\n\t\tY\n\tC\n\t\tZ\nD"


@pytest.fixture
def ids() -> CountingIds:
    return CountingIds()


@pytest.fixture
def simple_forest(ids: CountingIds) -> Forest:
    return parse_text(SIMPLE_TEXT, id_factory=ids)


@pytest.fixture
def nested_forest(ids: CountingIds) -> Forest:
    return parse_text(NESTED_TEXT, id_factory=ids)
