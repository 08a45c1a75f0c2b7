"""Filter, search, sort and query string behaviour of the listing pipeline."""
import itertools
from datetime import date

import pytest
from django.http import QueryDict

from common.dates import month_bounds, parse_date_range, week_bounds
from common.listing import (
    ASC, DESC, STAGES, FilterState, Listing, SortKey, run_pipeline, sort_records,
)
from courses import demo as course_demo
from courses.listings import CATALOG_LISTING, ENROLLMENT_LISTING, TEACHER_COURSE_LISTING
from tutoring import demo as tutoring_demo
from tutoring.listings import SESSION_LISTING, SESSION_REQUEST_LISTING, TEACHER_REQUEST_LISTING

TODAY = date(2024, 3, 6)


def titles(records, field='title'):
    return [record[field] for record in records]


def run(records, listing, query, today=TODAY):
    state = FilterState.from_query(query, listing)
    return sort_records(run_pipeline(records, listing, state, today=today), listing, state)


# Scenarios
@pytest.mark.parametrize('sort_by', ['popularity', 'price_low', 'price_high', 'newest', 'highest_rated', 'bogus'])
def test_catalog_level_filter_ignores_sort(sort_by):
    result = run(course_demo.catalog_courses(), CATALOG_LISTING, {'level': 'beginner', 'sortBy': sort_by})

    assert sorted(titles(result)) == ['Business Analytics Fundamentals', 'UI/UX Design Fundamentals']


def test_enrollments_completed_tab():
    result = run(course_demo.enrollments(), ENROLLMENT_LISTING, {'activeTab': 'completed'})

    assert sorted(titles(result, 'course_title')) == ['Data Science with Python', 'UI/UX Design Fundamentals']
    assert {record['progress'] for record in result} == {100}


def test_session_requests_pending_tab_includes_under_review():
    records = tutoring_demo.session_requests()
    result = run(records, SESSION_REQUEST_LISTING, {'activeTab': 'pending'})

    assert sorted(titles(result)) == [
        'Business Analytics Project Review',
        'Logo Design Critique',
        'React Hooks Deep Dive',
        'UI Design Portfolio Review',
    ]
    assert {record['status'] for record in result} == {'pending', 'under_review'}


# Pipeline properties
def test_stage_order_does_not_change_the_result():
    records = course_demo.enrollments()
    state = FilterState.from_query(
        {'activeTab': 'all', 'status': 'completed', 'search': 'a', 'progress': 'completed'},
        ENROLLMENT_LISTING,
    )

    expected = None
    for stages in itertools.permutations(STAGES):
        result = list(records)
        for stage in stages:
            result = stage(result, ENROLLMENT_LISTING, state, TODAY)
        ids = [record['id'] for record in sort_records(result, ENROLLMENT_LISTING, state)]
        if expected is None:
            expected = ids
        assert ids == expected
    assert expected == [6, 3]


def test_session_stage_order_with_date_range():
    records = tutoring_demo.sessions()
    state = FilterState.from_query({'activeTab': 'all', 'date': 'this_month', 'search': 'design'}, SESSION_LISTING)

    results = set()
    for stages in itertools.permutations(STAGES):
        result = list(records)
        for stage in stages:
            result = stage(result, SESSION_LISTING, state, TODAY)
        results.add(tuple(sorted(record['id'] for record in result)))
    assert len(results) == 1


def test_pipeline_is_idempotent():
    records = tutoring_demo.sessions()
    query = {'activeTab': 'all', 'search': 'python', 'sortBy': 'title'}

    assert run(records, SESSION_LISTING, query) == run(records, SESSION_LISTING, query)


def test_empty_search_filters_and_all_tab_are_no_ops():
    records = course_demo.enrollments()
    state = FilterState.from_query({'activeTab': 'all', 'search': '   ', 'status': '', 'progress': ''}, ENROLLMENT_LISTING)

    assert run_pipeline(records, ENROLLMENT_LISTING, state, today=TODAY) == records


def test_search_is_case_insensitive_substring_over_any_field():
    records = course_demo.enrollments()

    by_title = run(records, ENROLLMENT_LISTING, {'activeTab': 'all', 'search': 'FLUTTER'})
    by_instructor = run(records, ENROLLMENT_LISTING, {'activeTab': 'all', 'search': 'rodriguez'})

    assert titles(by_title, 'course_title') == ['Flutter App Development']
    assert titles(by_instructor, 'course_title') == ['UI/UX Design Fundamentals']


def test_progress_ranges():
    records = course_demo.enrollments() + [{**course_demo.enrollments()[0], 'id': 99, 'progress': 0}]

    not_started = run(records, ENROLLMENT_LISTING, {'activeTab': 'all', 'progress': 'not_started'})
    in_progress = run(records, ENROLLMENT_LISTING, {'activeTab': 'all', 'progress': 'in_progress'})

    assert [record['id'] for record in not_started] == [99]
    assert all(0 < record['progress'] < 100 for record in in_progress)
    assert len(in_progress) == 5


def test_categorical_filters_compare_as_text():
    records = course_demo.teacher_courses()

    result = run(records, TEACHER_COURSE_LISTING, {'subject': '3'})

    assert titles(result, 'name') == ['UI/UX Design Fundamentals']


def test_teacher_inbox_date_range():
    records = [
        {'id': 1, 'title': 'A', 'date': '2024-03-01', 'status': 'pending', 'created_at': '2024-02-01'},
        {'id': 2, 'title': 'B', 'date': '2024-03-10', 'status': 'pending', 'created_at': '2024-02-02'},
        {'id': 3, 'title': 'C', 'date': '2024-03-20', 'status': 'pending', 'created_at': '2024-02-03'},
    ]

    result = run(records, TEACHER_REQUEST_LISTING, {'dateRange': '2024-03-05 to 2024-03-20'})

    assert sorted(record['id'] for record in result) == [2, 3]


def test_calendar_boundaries():
    assert week_bounds(TODAY) == (date(2024, 3, 4), date(2024, 3, 10))
    assert month_bounds(date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert parse_date_range('2024-03-20 to 2024-03-05') == (date(2024, 3, 5), date(2024, 3, 20))
    assert parse_date_range('2024-03-05') == (date(2024, 3, 5), date(2024, 3, 5))
    assert parse_date_range('next week') is None


# Sorting
STABLE_LISTING = Listing(
    name='stable',
    sorts={
        'score': SortKey('score', DESC),
        'name': SortKey('name', ASC, text=True),
        'joined': SortKey('joined', ASC),
    },
    default_sort='score',
    directional=True,
)


@pytest.mark.parametrize('sort_by', list(STABLE_LISTING.sorts))
@pytest.mark.parametrize('direction', [ASC, DESC])
def test_sort_is_stable_for_every_key(sort_by, direction):
    records = [{'id': i, 'score': 5, 'name': 'Same', 'joined': date(2024, 1, 1)} for i in range(6)]
    state = FilterState.from_query({'sortBy': sort_by, 'sortDirection': direction}, STABLE_LISTING)

    assert [r['id'] for r in sort_records(records, STABLE_LISTING, state)] == list(range(6))


def test_ties_keep_input_order_between_distinct_values():
    records = [
        {'id': 1, 'score': 2}, {'id': 2, 'score': 9}, {'id': 3, 'score': 2}, {'id': 4, 'score': 9},
    ]
    state = FilterState.initial(STABLE_LISTING)

    assert [r['id'] for r in sort_records(records, STABLE_LISTING, state)] == [2, 4, 1, 3]


def test_string_sort_ignores_case_and_missing_values_sort_last():
    records = [{'id': 1, 'name': 'beta'}, {'id': 2, 'name': None}, {'id': 3, 'name': 'Alpha'}]
    state = FilterState.from_query({'sortBy': 'name'}, STABLE_LISTING)

    assert [r['id'] for r in sort_records(records, STABLE_LISTING, state)] == [3, 1, 2]


@pytest.mark.parametrize('listing', [TEACHER_COURSE_LISTING, SESSION_REQUEST_LISTING])
def test_status_sort_ignores_case(listing):
    records = [{'id': 1, 'status': 'pending'}, {'id': 2, 'status': 'Draft'}, {'id': 3, 'status': 'active'}]
    state = FilterState.from_query({'sortBy': 'status'}, listing)

    assert listing.sort_key('status').text
    assert [r['id'] for r in sort_records(records, listing, state)] == [3, 2, 1]


def test_catalog_sorts():
    records = course_demo.catalog_courses()

    cheapest = run(records, CATALOG_LISTING, {'sortBy': 'price_low'})
    popular = run(records, CATALOG_LISTING, {})

    assert cheapest[0]['title'] == 'UI/UX Design Fundamentals'
    assert popular[0]['title'] == 'UI/UX Design Fundamentals'
    assert [r['students'] for r in popular] == sorted((r['students'] for r in records), reverse=True)


def test_fixed_direction_listing_ignores_sort_direction():
    records = course_demo.catalog_courses()

    result = run(records, CATALOG_LISTING, {'sortBy': 'price_low', 'sortDirection': 'desc'})

    assert [r['price'] for r in result] == sorted(r['price'] for r in records)


# Filter state
def test_unknown_tab_and_sort_fall_back_to_defaults():
    state = FilterState.from_query({'activeTab': 'nope', 'sortBy': 'nope'}, ENROLLMENT_LISTING)

    assert state.tab == 'active'
    assert state.sort_by == 'last_accessed'
    assert state.sort_direction == DESC


def test_legacy_search_parameter():
    state = FilterState.from_query({'searchQuery': ' laravel '}, CATALOG_LISTING)

    assert state.search == 'laravel'


def test_legacy_filter_parameters():
    result = run(course_demo.catalog_courses(), CATALOG_LISTING, {'selectedLevel': 'beginner'})
    state = FilterState.from_query({'selectedCategory': 'design', 'category': 'marketing'}, CATALOG_LISTING)

    assert sorted(titles(result)) == ['Business Analytics Fundamentals', 'UI/UX Design Fundamentals']
    assert state.filters == {'category': 'marketing'}
    assert FilterState.from_query({'selectedLevel': 'beginner'}, ENROLLMENT_LISTING).filters == {}


def test_changes_reset_the_page():
    state = FilterState.from_query({'page': '4'}, CATALOG_LISTING)

    assert state.page == 4
    assert state.replace(search='react').page == 1
    assert state.with_filter('level', 'beginner').page == 1
    assert state.replace(page=2).page == 2
    assert FilterState.from_query({'page': 'x'}, CATALOG_LISTING).page == 1


def test_toggle_sort():
    state = FilterState.initial(TEACHER_COURSE_LISTING)

    by_name = state.toggle_sort('name')
    assert (by_name.sort_by, by_name.sort_direction) == ('name', ASC)
    flipped = by_name.toggle_sort('name')
    assert (flipped.sort_by, flipped.sort_direction) == ('name', DESC)


@pytest.mark.parametrize('query', [
    {},
    {'search': 'design', 'level': 'beginner', 'sortBy': 'newest', 'page': '2'},
    {'category': 'development', 'sortBy': 'price_high'},
])
def test_query_string_round_trip(query):
    state = FilterState.from_query(query, CATALOG_LISTING)

    assert FilterState.from_query(QueryDict(state.to_query()), CATALOG_LISTING) == state


def test_query_string_round_trip_with_direction_and_tab():
    state = FilterState.from_query(
        {'sortBy': 'name', 'sortDirection': 'desc', 'status': 'draft'}, TEACHER_COURSE_LISTING
    )
    tabbed = FilterState.from_query({'activeTab': 'archived', 'progress': 'completed'}, ENROLLMENT_LISTING)

    assert FilterState.from_query(QueryDict(state.to_query()), TEACHER_COURSE_LISTING) == state
    assert FilterState.from_query(QueryDict(tabbed.to_query()), ENROLLMENT_LISTING) == tabbed


def test_defaults_are_left_out_of_the_query_string():
    assert FilterState.initial(ENROLLMENT_LISTING).to_query() == ''
