# courses/presenters.py
from common.presenters import (
    badge_class, format_date, format_price, percentage, relative_time, status_label,
)

from .demo import CATEGORIES
from .models import Course

LEVEL_LABELS = dict(Course.LEVEL_CHOICES)


def present_course(record, wishlist_ids=()):
    price = record.get('price')
    sale_price = record.get('sale_price')
    has_discount = sale_price is not None and price and float(sale_price) < float(price)
    return {
        **record,
        'category_name': record.get('category_name') or CATEGORIES.get(record.get('category'), ''),
        'level_label': LEVEL_LABELS.get(record.get('level'), status_label(record.get('level'))),
        'display_price': format_price(sale_price if has_discount else price),
        'original_price': format_price(price) if has_discount else '',
        'has_discount': bool(has_discount),
        'discount_percentage': percentage(float(price) - float(sale_price), price) if has_discount else 0,
        'created_display': format_date(record.get('created_at')),
        'in_wishlist': record.get('id') in wishlist_ids,
    }


def present_enrollment(record, now=None):
    return {
        **record,
        'progress': percentage(record.get('progress')),
        'badge': badge_class('enrollment', record.get('status')),
        'status_label': status_label(record.get('status')),
        'enrolled_display': format_date(record.get('enrollment_date')),
        'last_accessed_display': relative_time(record.get('last_accessed'), now=now),
        'expiry_display': format_date(record.get('expiry_date')),
        'certificate_display': format_date(record.get('certificate_date')),
        'lessons_label': f"{record.get('completed_lessons', 0)}/{record.get('total_lessons', 0)}",
        'can_download_certificate': record.get('status') == 'completed' and bool(record.get('has_certificate')),
    }


def present_teacher_course(record):
    students = record.get('students_count') or 0
    capacity = record.get('max_students') or 0
    return {
        **record,
        'badge': badge_class('course', record.get('status')),
        'status_label': status_label(record.get('status')),
        'level_label': LEVEL_LABELS.get(record.get('level'), status_label(record.get('level'))),
        'price_display': format_price(record.get('price')),
        'start_display': format_date(record.get('start_date')),
        'end_display': format_date(record.get('end_date')),
        'created_display': relative_time(record.get('created_at')),
        'enrollment_label': f"{students}/{capacity}",
        'fill_percentage': percentage(students, capacity),
    }
