# common/listing.py
"""
Filter, search and sort declarations shared by every list screen.

A ``Listing`` describes the tabs, categorical filters, search fields, range
filters and sort keys of one screen. ``FilterState`` is the immutable view
state parsed from the query string. The same declaration runs over in-memory
records (``run_pipeline`` and ``sort_records``) or over a queryset
(``filter_queryset`` and ``order_queryset``).
"""
import operator
from dataclasses import dataclass, field, replace as dataclass_replace
from datetime import date, datetime
from urllib.parse import urlencode

from django.core.exceptions import ValidationError
from django.db.models import F, Q
from django.db.models.functions import Lower
from django.utils import timezone

from .dates import month_bounds, parse_date_range, to_date, week_bounds

ASC = 'asc'
DESC = 'desc'
DIRECTIONS = (ASC, DESC)

SEARCH_PARAM = 'search'
LEGACY_SEARCH_PARAM = 'searchQuery'
LEGACY_FILTER_PARAMS = {'selectedCategory': 'category', 'selectedLevel': 'level'}
TAB_PARAM = 'activeTab'
SORT_PARAM = 'sortBy'
DIRECTION_PARAM = 'sortDirection'
PAGE_PARAM = 'page'


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: str = ASC
    text: bool = False


class RangeFilter:
    """Named predicate groups over one field, resolved to comparison lookups"""

    COMPARISONS = {
        'exact': operator.eq,
        'gt': operator.gt,
        'gte': operator.ge,
        'lt': operator.lt,
        'lte': operator.le,
    }

    def __init__(self, field, options=None, resolver=None):
        self.field = field
        self.options = options or {}
        self.resolver = resolver

    def resolve(self, value, today):
        if self.resolver is not None:
            return self.resolver(value, today)
        option = self.options.get(value)
        if callable(option):
            return option(today)
        return option

    def matches(self, record, bounds):
        raw = lookup(record, self.field)
        for name, bound in bounds.items():
            current = _coerce(raw, bound)
            if current is None or not self.COMPARISONS[name](current, bound):
                return False
        return True


def calendar_range(field_name):
    return RangeFilter(field_name, options={
        'today': lambda today: {'exact': today},
        'this_week': lambda today: dict(zip(('gte', 'lte'), week_bounds(today))),
        'this_month': lambda today: dict(zip(('gte', 'lte'), month_bounds(today))),
    })


def between_range(field_name):
    def resolve(value, today):
        bounds = parse_date_range(value)
        if bounds is None:
            return None
        return {'gte': bounds[0], 'lte': bounds[1]}
    return RangeFilter(field_name, resolver=resolve)


@dataclass(frozen=True)
class Listing:
    name: str
    sorts: dict
    default_sort: str
    search_fields: tuple = ()
    filters: dict = field(default_factory=dict)
    ranges: dict = field(default_factory=dict)
    tabs: dict = field(default_factory=dict)
    default_tab: str = ''
    status_field: str = 'status'
    directional: bool = False

    @property
    def filter_names(self):
        return tuple(self.filters) + tuple(self.ranges)

    def sort_key(self, name):
        return self.sorts.get(name) or self.sorts[self.default_sort]

    def default_direction(self, sort_by):
        return self.sort_key(sort_by).direction


def _page_number(value):
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


@dataclass(frozen=True)
class FilterState:
    listing: Listing = field(compare=False, repr=False)
    search: str = ''
    filters: dict = field(default_factory=dict)
    tab: str = ''
    sort_by: str = ''
    sort_direction: str = ASC
    page: int = 1

    @classmethod
    def initial(cls, listing):
        return cls(
            listing=listing,
            tab=listing.default_tab,
            sort_by=listing.default_sort,
            sort_direction=listing.default_direction(listing.default_sort),
        )

    @classmethod
    def from_query(cls, query, listing):
        search = (query.get(SEARCH_PARAM) or query.get(LEGACY_SEARCH_PARAM) or '').strip()

        filters = {}
        for name in listing.filter_names:
            value = (query.get(name) or '').strip()
            if value:
                filters[name] = value
        for legacy, name in LEGACY_FILTER_PARAMS.items():
            value = (query.get(legacy) or '').strip()
            if value and name in listing.filter_names:
                filters.setdefault(name, value)

        tab = query.get(TAB_PARAM) or listing.default_tab
        if tab not in listing.tabs:
            tab = listing.default_tab

        sort_by = query.get(SORT_PARAM)
        if sort_by not in listing.sorts:
            sort_by = listing.default_sort
        sort_direction = listing.default_direction(sort_by)
        if listing.directional and query.get(DIRECTION_PARAM) in DIRECTIONS:
            sort_direction = query.get(DIRECTION_PARAM)

        return cls(
            listing=listing,
            search=search,
            filters=filters,
            tab=tab,
            sort_by=sort_by,
            sort_direction=sort_direction,
            page=_page_number(query.get(PAGE_PARAM)),
        )

    def value(self, name):
        return self.filters.get(name, '')

    def replace(self, **changes):
        if 'filters' in changes:
            changes['filters'] = {
                name: value for name, value in changes['filters'].items()
                if value not in (None, '')
            }
        if set(changes) - {'page'}:
            changes.setdefault('page', 1)
        return dataclass_replace(self, **changes)

    def with_filter(self, name, value):
        return self.replace(filters={**self.filters, name: value})

    def toggle_sort(self, key):
        if key not in self.listing.sorts:
            key = self.listing.default_sort
        if key == self.sort_by:
            direction = DESC if self.sort_direction == ASC else ASC
        else:
            direction = ASC
        return self.replace(sort_by=key, sort_direction=direction)

    def to_params(self, include_page=True):
        listing = self.listing
        params = []
        if self.search:
            params.append((SEARCH_PARAM, self.search))
        for name in listing.filter_names:
            if self.filters.get(name):
                params.append((name, self.filters[name]))
        if self.tab != listing.default_tab:
            params.append((TAB_PARAM, self.tab))
        if self.sort_by != listing.default_sort:
            params.append((SORT_PARAM, self.sort_by))
        if listing.directional and self.sort_direction != listing.default_direction(self.sort_by):
            params.append((DIRECTION_PARAM, self.sort_direction))
        if include_page and self.page > 1:
            params.append((PAGE_PARAM, self.page))
        return params

    def to_query(self):
        return urlencode(self.to_params())

    # Template helpers
    @property
    def query_without_page(self):
        return urlencode(self.to_params(include_page=False))

    @property
    def tab_queries(self):
        return [(tab, self.replace(tab=tab).to_query()) for tab in self.listing.tabs]

    @property
    def sort_queries(self):
        return {key: self.toggle_sort(key).to_query() for key in self.listing.sorts}

    @property
    def is_filtered(self):
        return bool(self.search or self.filters)


def lookup(record, field_name):
    value = record
    for part in field_name.split('.'):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _as_text(value):
    return '' if value is None else str(value)


def _coerce(value, bound):
    if value is None or value == '':
        return None
    if isinstance(bound, date) and not isinstance(bound, datetime):
        return to_date(value)
    return value


# Pipeline stages
def apply_tab(records, listing, state, today=None):
    statuses = listing.tabs.get(state.tab)
    if statuses is None:
        return list(records)
    return [r for r in records if lookup(r, listing.status_field) in statuses]


def apply_filters(records, listing, state, today=None):
    records = list(records)
    for name, field_name in listing.filters.items():
        value = state.value(name)
        if value:
            records = [r for r in records if _as_text(lookup(r, field_name)) == value]
    return records


def apply_search(records, listing, state, today=None):
    needle = state.search.strip().lower()
    if not needle or not listing.search_fields:
        return list(records)
    return [
        r for r in records
        if any(needle in _as_text(lookup(r, f)).lower() for f in listing.search_fields)
    ]


def apply_ranges(records, listing, state, today=None):
    today = today or timezone.localdate()
    records = list(records)
    for name, range_filter in listing.ranges.items():
        value = state.value(name)
        bounds = range_filter.resolve(value, today) if value else None
        if bounds:
            records = [r for r in records if range_filter.matches(r, bounds)]
    return records


STAGES = (apply_tab, apply_filters, apply_search, apply_ranges)


def run_pipeline(records, listing, state, today=None):
    today = today or timezone.localdate()
    records = list(records)
    for stage in STAGES:
        records = stage(records, listing, state, today)
    return records


def _sort_value(value, text):
    if text:
        return str(value).lower()
    return value


def is_descending(listing, state):
    key = listing.sort_key(state.sort_by)
    direction = state.sort_direction if listing.directional else key.direction
    return direction == DESC


def sort_records(records, listing, state):
    key = listing.sort_key(state.sort_by)
    present, missing = [], []
    for record in records:
        value = lookup(record, key.field)
        (missing if value in (None, '') else present).append(record)
    present.sort(
        key=lambda r: _sort_value(lookup(r, key.field), key.text),
        reverse=is_descending(listing, state),
    )
    return present + missing


# Queryset translation
def _path(lookups, name):
    return (lookups or {}).get(name, name).replace('.', '__')


def filter_queryset(queryset, listing, state, lookups=None, today=None):
    today = today or timezone.localdate()

    statuses = listing.tabs.get(state.tab)
    if statuses is not None:
        queryset = queryset.filter(**{f'{_path(lookups, listing.status_field)}__in': statuses})

    for name, field_name in listing.filters.items():
        value = state.value(name)
        if value:
            try:
                queryset = queryset.filter(**{_path(lookups, field_name): value})
            except (TypeError, ValueError, ValidationError):
                # a value the column cannot hold matches nothing
                return queryset.none()

    search = state.search.strip()
    if search and listing.search_fields:
        condition = Q()
        for field_name in listing.search_fields:
            condition |= Q(**{f'{_path(lookups, field_name)}__icontains': search})
        queryset = queryset.filter(condition)

    for name, range_filter in listing.ranges.items():
        value = state.value(name)
        bounds = range_filter.resolve(value, today) if value else None
        if bounds:
            path = _path(lookups, range_filter.field)
            queryset = queryset.filter(**{
                f'{path}__{comparison}': bound for comparison, bound in bounds.items()
            })

    return queryset


def order_queryset(queryset, listing, state, lookups=None):
    key = listing.sort_key(state.sort_by)
    path = _path(lookups, key.field)
    expression = Lower(path) if key.text else F(path)
    if is_descending(listing, state):
        ordering = expression.desc(nulls_last=True)
    else:
        ordering = expression.asc(nulls_last=True)
    return queryset.order_by(ordering, 'pk')
