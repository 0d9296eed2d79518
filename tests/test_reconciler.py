"""
Tests for the selection reconciler in entity_browser/services/reconciler.py
"""
import pytest
from entity_browser.services.reconciler import (
    ReferenceValue,
    apply_row_weights,
    flatten,
    parse_selection,
    reconcile,
    serialize,
    sort_by_weight,
    to_item_records,
)


def ids(values):
    return [v.target_id for v in values]


class TestParseSelection:
    """Tests for parse_selection function."""

    def test_space_delimited(self):
        assert parse_selection('5 9 3') == ['5', '9', '3']

    @pytest.mark.parametrize('raw', [None, '', ' ', '     '])
    def test_empty_input(self, raw):
        assert parse_selection(raw) == []

    def test_stray_delimiters(self):
        assert parse_selection('  5   9 ') == ['5', '9']

    def test_keeps_duplicates(self):
        """Parsing does not de-duplicate; reconciliation does."""
        assert parse_selection('5 5') == ['5', '5']


class TestReconcile:
    """Tests for reconcile function."""

    def test_empty_current_collapses_duplicates(self):
        result = reconcile([], '5 9 5 3')

        assert ids(result) == ['5', '9', '3']
        assert [v.weight for v in result] == [0, 1, 2]
        assert all(v.description == '' for v in result)

    def test_existing_metadata_preserved(self):
        result = reconcile([ReferenceValue('5', description='x')], '5 7')

        assert result == [
            ReferenceValue('5', weight=0, description='x'),
            ReferenceValue('7', weight=1, description=''),
        ]

    def test_integer_ids_match_incoming_tokens(self):
        result = reconcile([ReferenceValue(5, description='x')], '5 7')

        assert ids(result) == ['5', '7']
        assert result[0].description == 'x'

    def test_ids_normalized_on_construction(self):
        assert ReferenceValue(5) == ReferenceValue(' 5 ') == ReferenceValue('5')
        assert ReferenceValue(None).target_id == ''

    def test_empty_incoming_returns_current(self, current_values):
        assert reconcile(current_values, '') == current_values

    def test_whitespace_incoming_returns_current(self, current_values):
        assert reconcile(current_values, '   ') == current_values

    def test_incoming_subset_in_any_order_returns_current(self, current_values):
        assert reconcile(current_values, '3 5 9') == current_values
        assert reconcile(current_values, '9') == current_values

    def test_new_items_appended_in_incoming_order(self, current_values):
        result = reconcile(current_values, '12 5 10 3 12')

        assert ids(result) == ['5', '9', '3', '12', '10']
        assert result[:3] == current_values
        assert result[3] == ReferenceValue('12', weight=3)
        assert result[4] == ReferenceValue('10', weight=4)

    def test_idempotent(self, current_values):
        once = reconcile(current_values, '1 9 2')
        twice = reconcile(once, '1 9 2')

        assert twice == once

    def test_current_weights_not_sorted(self):
        """Ordering is sequence position, never weight."""
        current = [ReferenceValue('a', weight=5), ReferenceValue('b', weight=1)]

        assert ids(reconcile(current, 'c')) == ['a', 'b', 'c']

    def test_current_duplicates_and_empty_ids_dropped(self):
        current = [ReferenceValue('5', description='first'), ReferenceValue(''), ReferenceValue('5', description='second')]

        assert reconcile(current, '') == [ReferenceValue('5', description='first')]

    def test_incoming_sequence(self):
        assert ids(reconcile([], ['4', '', 4, '8'])) == ['4', '8']

    def test_coerces_mixed_current(self):
        class Item:
            target_id = 7
            delta = 2
            description = 'stored'

        result = reconcile([{'target_id': 5, 'description': 'x'}, Item(), 11], '')

        assert result == [
            ReferenceValue('5', weight=0, description='x'),
            ReferenceValue('7', weight=2, description='stored'),
            ReferenceValue('11'),
        ]

    def test_does_not_mutate_inputs(self, current_values):
        snapshot = list(current_values)
        reconcile(current_values, '1 2')

        assert current_values == snapshot


class TestRowWeights:
    """Tests for apply_row_weights and sort_by_weight."""

    def test_relinearizes_from_position(self):
        values = [ReferenceValue('a', weight=7), ReferenceValue('b', weight=3), ReferenceValue('c', weight=3)]

        result = apply_row_weights(values)

        assert ids(result) == ['a', 'b', 'c']
        assert [v.weight for v in result] == [0, 1, 2]

    def test_keeps_description(self):
        result = apply_row_weights([ReferenceValue('a', weight=4, description='d')])

        assert result == [ReferenceValue('a', weight=0, description='d')]

    def test_sort_by_submitted_weight(self):
        rows = [ReferenceValue('a', weight=2), ReferenceValue('b', weight=-1), ReferenceValue('c', weight=0)]

        assert ids(sort_by_weight(rows)) == ['b', 'c', 'a']

    def test_sort_is_stable(self):
        rows = [ReferenceValue('a', weight=1), ReferenceValue('b', weight=0), ReferenceValue('c', weight=1)]

        assert ids(sort_by_weight(rows)) == ['b', 'a', 'c']


class TestFlatten:
    """Tests for flatten, to_item_records and serialize."""

    def test_flatten_reference_set(self):
        values = [ReferenceValue('3'), ReferenceValue('7'), ReferenceValue('9')]

        assert flatten(values) == [{'target_id': '3'}, {'target_id': '7'}, {'target_id': '9'}]

    def test_flatten_raw_string(self):
        assert flatten('3 7  9') == [{'target_id': '3'}, {'target_id': '7'}, {'target_id': '9'}]

    @pytest.mark.parametrize('raw', ['', '   ', None])
    def test_flatten_empty(self, raw):
        assert flatten(raw) == []

    def test_item_records(self, current_values):
        assert to_item_records(current_values) == [
            {'target_id': '5', 'weight': 0, 'description': 'Cover image'},
            {'target_id': '9', 'weight': 1, 'description': ''},
            {'target_id': '3', 'weight': 2, 'description': 'Footer logo'},
        ]

    def test_serialize(self, current_values):
        assert serialize(current_values) == '5 9 3'
        assert serialize([]) == ''

    def test_serialize_feeds_back_unchanged(self, current_values):
        """A rebuilt hidden value reconciled against its own rows adds nothing."""
        assert reconcile(current_values, serialize(current_values)) == current_values
