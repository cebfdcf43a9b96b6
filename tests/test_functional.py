## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from basicverbs.types import undefined, __
from basicverbs.errors import VerbNameError
from basicverbs.curry import curry_n
from basicverbs.functional import lookup, get_path, list_functions, round_half_up


def test_nested_path_traversal():
    data = {'a': 1, 'b': 2, 'c': {'d': 5}}
    assert get_path(['c', 'd'], data) == 5
    assert get_path(['c', 'f'], data) is undefined
    assert get_path(['c', 'd', 'e'], data) is undefined
    assert get_path([], data) is data


def test_path_through_lists():
    data = {'items': [{'id': 7}, {'id': 8}]}
    assert lookup('path')(['items', 1, 'id'], data) == 8
    assert lookup('path')(['items', 5, 'id'], data) is undefined


def test_data_last_partial_application():
    first_two = lookup('take')(2)
    assert first_two([1, 2, 3]) == [1, 2]
    assert lookup('prop')('x')({'x': 1}) == 1
    assert lookup('nth')(3, [1]) is undefined
    assert lookup('nth')('a', [1]) is undefined


def test_higher_order_functions_accept_partials():
    double = lookup('multiply')(2)
    assert lookup('map')(double, [1, 2, 3]) == [2, 4, 6]
    assert lookup('filter')(lookup('gt')(__, 1), [0, 1, 2, 3]) == [2, 3]
    assert lookup('reduce')(lookup('add'), 0, [1, 2, 3]) == 6


def test_pipe_and_compose():
    inc, double = lookup('inc'), lookup('multiply')(2)
    assert lookup('pipe')(inc, double)(3) == 8
    assert lookup('compose')(inc, double)(3) == 7


def test_assoc_does_not_mutate():
    original = {'a': 1}
    updated = lookup('assoc')('b', 2, original)
    assert updated == {'a': 1, 'b': 2}
    assert original == {'a': 1}


def test_round_half_up_like_javascript():
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(-1.5) == -1


def test_unknown_function():
    with pytest.raises(VerbNameError):
        lookup('frobnicate')
    assert 'map' in list_functions()


def test_max_and_min_are_built_with_curry_n():
    assert lookup('max') == curry_n(2, max)
    assert lookup('min') == curry_n(2, min)
    assert lookup('max')(1, 9, 4) == 9
