# common/repositories.py
from django.conf import settings
from django.core.paginator import Paginator

from .exceptions import NotFoundError
from .listing import filter_queryset, lookup, order_queryset, run_pipeline, sort_records


def page_size(per_page=None):
    return per_page or getattr(settings, 'TUTORHUB_PAGE_SIZE', 12)


def use_demo_data():
    return getattr(settings, 'TUTORHUB_USE_DEMO_DATA', False)


class FixtureRepository:
    """Read-only repository over a list of plain records"""

    def __init__(self, records, listing, id_field='id', name='Record'):
        self._records = list(records)
        self.listing = listing
        self.id_field = id_field
        self.name = name

    def all(self):
        return list(self._records)

    def find_by_id(self, pk):
        for record in self._records:
            if str(lookup(record, self.id_field)) == str(pk):
                return record
        return None

    def get(self, pk):
        record = self.find_by_id(pk)
        if record is None:
            raise NotFoundError(self.name, pk)
        return record

    def get_record(self, pk):
        return self.get(pk)

    def filter(self, state, today=None):
        records = run_pipeline(self._records, self.listing, state, today=today)
        return sort_records(records, self.listing, state)

    def query(self, state, per_page=None, today=None):
        paginator = Paginator(self.filter(state, today=today), page_size(per_page))
        return paginator.get_page(state.page)


class QuerySetRepository:
    """Repository over a Django queryset, translating logical field names via ``lookups``"""

    def __init__(self, queryset, listing, lookups=None, to_record=None):
        self.queryset = queryset
        self.model = queryset.model
        self.listing = listing
        self.lookups = lookups or {}
        self.to_record = to_record

    def all(self):
        return self._records(self.queryset)

    def find_by_id(self, pk):
        try:
            return self.queryset.filter(pk=pk).first()
        except (TypeError, ValueError):
            return None

    def get(self, pk):
        obj = self.find_by_id(pk)
        if obj is None:
            raise NotFoundError(self.model.__name__, pk)
        return obj

    def get_record(self, pk):
        obj = self.get(pk)
        return obj if self.to_record is None else self.to_record(obj)

    def filter(self, state, today=None):
        queryset = filter_queryset(self.queryset, self.listing, state, self.lookups, today=today)
        return order_queryset(queryset, self.listing, state, self.lookups)

    def query(self, state, per_page=None, today=None):
        paginator = Paginator(self.filter(state, today=today), page_size(per_page))
        page = paginator.get_page(state.page)
        page.object_list = self._records(page.object_list)
        return page

    def create(self, **fields):
        obj = self.model(**fields)
        obj.full_clean()
        obj.save()
        return obj

    def update(self, pk, **fields):
        obj = self.get(pk)
        for name, value in fields.items():
            setattr(obj, name, value)
        obj.full_clean()
        obj.save()
        return obj

    def delete(self, pk):
        obj = self.get(pk)
        obj.delete()
        return obj

    def _records(self, objects):
        if self.to_record is None:
            return list(objects)
        return [self.to_record(obj) for obj in objects]
