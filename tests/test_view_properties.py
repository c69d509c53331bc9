from __future__ import annotations

import pytest

pytest.importorskip("hypothesis")

from hypothesis import given
from hypothesis import strategies as st

from client.view import ALL_CATEGORIES, filter_expenses, summarize, total_amount
from models.expense import CATEGORIES

records_strategy = st.lists(
    st.fixed_dictionaries(
        {
            "_id": st.uuids().map(str),
            "description": st.text(max_size=20),
            "amount": st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False),
            "category": st.sampled_from(CATEGORIES),
        }
    ),
    max_size=25,
)
filters = st.sampled_from((ALL_CATEGORIES,) + CATEGORIES)


@given(records_strategy, st.text(max_size=3), filters)
def test_record_is_kept_iff_both_predicates_hold(records, term, category):
    kept = {r["_id"] for r in filter_expenses(records, term, category)}
    for record in records:
        expected = term.lower() in record["description"].lower() and (
            category == ALL_CATEGORIES or record["category"] == category
        )
        assert (record["_id"] in kept) == expected


@given(records_strategy, st.text(max_size=3), filters)
def test_filtered_total_is_sum_over_filtered_set(records, term, category):
    summary = summarize(records, term, category)
    assert summary.filtered_total == total_amount(summary.filtered)
    assert summary.filtered_count == len(summary.filtered)
    assert summary.total_count == len(records)


@given(records_strategy)
def test_unfiltered_total_equals_grand_total(records):
    summary = summarize(records, "", ALL_CATEGORIES)
    assert summary.filtered_total == summary.grand_total
    assert summary.filtered_count == summary.total_count
