# common/views.py
import functools

from django.contrib import messages
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme

from .exceptions import InvalidTransitionError, NotOwnerError
from .listing import FilterState
from .notifications import Toast, notify


def role_required(role, message=None, redirect_to='accounts:dashboard'):
    """Let only users of ``role`` through; everyone else gets an error and a redirect"""
    def decorator(view):
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            if getattr(request.user, 'user_type', None) != role:
                messages.error(request, message or f"Only {role}s can access this page.")
                return redirect(redirect_to)
            return view(request, *args, **kwargs)
        return wrapper
    return decorator


class RoleRequiredMixin:
    required_role = None

    def dispatch(self, request, *args, **kwargs):
        if getattr(request.user, 'user_type', None) != self.required_role:
            messages.error(request, f"Only {self.required_role}s can access this page.")
            return redirect('accounts:dashboard')
        return super().dispatch(request, *args, **kwargs)


class ListingMixin:
    """Filter, sort and paginate a repository from the query string"""
    listing = None
    per_page = None

    def get_repository(self):
        raise NotImplementedError

    def present(self, record):
        return record

    def get_filter_state(self):
        return FilterState.from_query(self.request.GET, self.listing or self.repository.listing)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        self.repository = self.get_repository()
        state = self.get_filter_state()
        page_obj = self.repository.query(state, self.per_page)

        context.update({
            'state': state,
            'page_obj': page_obj,
            'records': [self.present(record) for record in page_obj.object_list],
            'current_filters': {
                'search': state.search,
                'tab': state.tab,
                'sort_by': state.sort_by,
                'sort_direction': state.sort_direction,
                **state.filters,
            },
        })
        return context


def show_domain_error(request, error):
    if isinstance(error, NotOwnerError):
        toast = Toast.error(error.message)
    elif isinstance(error, InvalidTransitionError):
        toast = Toast.warning(error.message)
    else:
        toast = Toast.error(error.message)
    return notify(request, toast)


def redirect_back(request, default, *args, **kwargs):
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return redirect(next_url)
    return redirect(default, *args, **kwargs)
