"""
Query-string driven list queries
================================

Every list endpoint (companies, leads, sites, users, tasks, notifications)
goes through QueryPipeline. It takes the query parameters of the request and
a base QuerySet and returns the QuerySet configured with:

1. filter   - every non-reserved key is a field constraint
2. sort     - ?sort=name,-created_at (default: newest first)
3. project  - ?fields=name,email (default: everything except `revision`)
4. paginate - ?page=2&limit=10 (defaults: page 1, 100 rows)

Query string syntax:
    ?lead_status=New                 → lead_status = 'New'
    ?priority=High&priority=Medium   → priority IN ('High', 'Medium')
    ?capacity[gte]=5&capacity[lt]=20 → 5 <= capacity < 20
    ?pfr_available=true              → pfr_available = True

Usage:
    pipeline = QueryPipeline(Company.objects.all(), request.GET).apply()
    companies = list(pipeline.queryset)

The pipeline never touches the database; the caller evaluates the QuerySet.
"""

import math
import re
from collections.abc import Mapping

from django.core.exceptions import FieldDoesNotExist, FieldError, ValidationError
from django.db.models import BooleanField, Q
from django.db.models.constants import LOOKUP_SEP

from .exceptions import QueryParamError


# Keys that drive the pipeline instead of filtering a field
RESERVED_PARAMS = ('page', 'sort', 'limit', 'fields', 'search')

# ?field[op]=value operators and their Django lookups
RANGE_OPERATORS = {
    'gte': 'gte',
    'gt': 'gt',
    'lte': 'lte',
    'lt': 'lt',
}

DEFAULT_SORT = '-created_at'
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 100

# Internal edit counter, hidden unless explicitly requested with ?fields=
REVISION_FIELD = 'revision'

# Largest OFFSET/LIMIT a 64-bit database integer can hold
MAX_OFFSET = 2 ** 63 - 1

# Query strings spell booleans; the ORM only accepts True/False
BOOLEAN_VALUES = {
    'true': True,
    '1': True,
    'false': False,
    '0': False,
}

BRACKET_KEY = re.compile(r'^(?P<field>[^\[\]]+)\[(?P<op>[^\[\]]*)\]$')


def parse_query_params(querydict):
    """
    Convert a QueryDict into plain values, once, at the request boundary

    - key=value            → 'value'
    - key=a&key=b          → ['a', 'b']
    - key[]=a&key[]=b      → ['a', 'b']
    - key[gte]=1&key[lt]=5 → {'gte': '1', 'lt': '5'}

    Reserved keys always keep their last value only.

    Raises:
        QueryParamError: the same field is given both as a plain value
                         and with operators
    """
    params = {}

    for key, values in querydict.lists():
        match = BRACKET_KEY.match(key)

        if match and match.group('op'):
            field = match.group('field')
            nested = params.setdefault(field, {})
            if not isinstance(nested, dict):
                raise QueryParamError(f'Conflicting filters for "{field}"')
            nested[match.group('op')] = values[-1]
            continue

        if match:
            # key[]=a&key[]=b
            key = match.group('field')
            value = list(values)
        elif key in RESERVED_PARAMS or len(values) == 1:
            value = values[-1]
        else:
            value = list(values)

        if isinstance(params.get(key), dict):
            raise QueryParamError(f'Conflicting filters for "{key}"')
        params[key] = value

    return params


def _last(value):
    """Reserved keys may arrive as lists when built by hand; keep the last one"""
    if isinstance(value, (list, tuple)):
        return value[-1] if value else None
    return value


def _split(value):
    """'name, -created_at,' → ['name', '-created_at']"""
    value = _last(value)
    if not value:
        return []
    return [part.strip() for part in str(value).split(',') if part.strip()]


def _positive_int(value, default):
    """
    Parse a page/limit value

    Anything that is not a positive whole number falls back to the default:
    '2' → 2, '2.0' → 2, 'abc' → default, '0' → default, '-3' → default.
    """
    try:
        number = float(str(_last(value)).strip())
    except (TypeError, ValueError):
        return default

    if not math.isfinite(number) or not number.is_integer() or number <= 0:
        return default
    return int(number)


def _coerce(model_field, value):
    """'true' / 'False' / '0' → bool for boolean fields, anything else untouched"""
    if isinstance(model_field, BooleanField) and isinstance(value, str):
        return BOOLEAN_VALUES.get(value.strip().lower(), value)
    return value


class QueryPipeline:
    """
    Build a list query from request parameters

    Args:
        queryset (QuerySet): Unfiltered base query for the resource
        params (Mapping | QueryDict): Raw query parameters
        hidden_fields (iterable): Fields that can never be filtered, sorted
                                  or selected (e.g. 'password')
        default_limit (int): Page size when ?limit is missing or invalid

    Every stage returns the pipeline so calls can be chained:
        QueryPipeline(qs, request.GET).filter().sort().project().paginate()
    """

    def __init__(self, queryset, params, hidden_fields=(), default_limit=DEFAULT_LIMIT):
        if hasattr(params, 'lists'):
            params = parse_query_params(params)

        self.queryset = queryset
        self.params = dict(params)
        self.hidden_fields = frozenset(hidden_fields)
        self.default_limit = default_limit

        # Filled in by paginate()
        self.page = None
        self.limit = None
        self.skip = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_field(self, name):
        if not name or LOOKUP_SEP in name or name in self.hidden_fields:
            raise QueryParamError(f'Invalid field name: "{name}"')

    def _resolve_field(self, name):
        self._check_field(name)
        try:
            return self.queryset.model._meta.get_field(name)
        except FieldDoesNotExist as exc:
            raise QueryParamError(f'Invalid field name: "{name}"') from exc

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def filter(self, search_fields=()):
        """
        Constrain the query by every non-reserved parameter

        A mapping value is a range constraint; its keys must all be one of
        gte/gt/lte/lt. A list value is an IN constraint. Anything else is
        an equality constraint.

        When `search_fields` is given, ?search=term also matches rows where
        any of those fields contains the term (case-insensitive).
        """
        lookups = {}

        for field, value in self.params.items():
            if field in RESERVED_PARAMS:
                continue
            model_field = self._resolve_field(field)

            if isinstance(value, Mapping):
                unknown = set(value) - set(RANGE_OPERATORS)
                if not value or unknown:
                    raise QueryParamError(
                        f'Unsupported operator for "{field}": {", ".join(sorted(unknown)) or "(none)"}'
                    )
                for op, bound in value.items():
                    lookups[f'{field}{LOOKUP_SEP}{RANGE_OPERATORS[op]}'] = _coerce(model_field, bound)
            elif isinstance(value, (list, tuple)):
                lookups[f'{field}{LOOKUP_SEP}in'] = [_coerce(model_field, item) for item in value]
            else:
                lookups[field] = _coerce(model_field, value)

        term = _last(self.params.get('search'))
        if search_fields and term and str(term).strip():
            condition = Q()
            for name in search_fields:
                condition |= Q(**{f'{name}__icontains': str(term).strip()})
            self.queryset = self.queryset.filter(condition)

        if lookups:
            try:
                self.queryset = self.queryset.filter(**lookups)
            except (FieldError, ValidationError, ValueError, TypeError) as exc:
                raise QueryParamError(f'Invalid filter: {exc}') from exc

        return self

    def sort(self):
        """
        Order by ?sort=a,-b (a ascending, then b descending)

        Without ?sort the newest rows come first.
        """
        keys = _split(self.params.get('sort'))

        for key in keys:
            self._resolve_field(key.lstrip('-'))

        try:
            self.queryset = self.queryset.order_by(*(keys or [DEFAULT_SORT]))
        except FieldError as exc:
            raise QueryParamError(f'Invalid sort: {exc}') from exc

        return self

    def project(self):
        """
        Load only ?fields=a,b (plus the primary key)

        Without ?fields everything is loaded except the revision counter
        and the hidden fields.
        """
        names = _split(self.params.get('fields'))

        if names:
            for name in names:
                self._resolve_field(name)
            self.queryset = self.queryset.only(*names)
        else:
            deferred = [REVISION_FIELD, *sorted(self.hidden_fields)]
            self.queryset = self.queryset.defer(*deferred)

        return self

    def paginate(self, max_limit=None):
        """
        Slice the query to one page

        skip = (page - 1) * limit. Invalid values fall back to the defaults,
        this stage never raises. `max_limit` caps the page size when given.
        A page that ends beyond what the database can address is empty.
        """
        self.page = _positive_int(self.params.get('page'), DEFAULT_PAGE)
        self.limit = min(_positive_int(self.params.get('limit'), self.default_limit), MAX_OFFSET)
        if max_limit:
            self.limit = min(self.limit, max_limit)
        self.skip = (self.page - 1) * self.limit

        if self.skip + self.limit > MAX_OFFSET:
            self.queryset = self.queryset.none()
        else:
            self.queryset = self.queryset[self.skip:self.skip + self.limit]

        return self

    def apply(self, search_fields=(), max_limit=None):
        """Run filter → sort → project → paginate"""
        return (
            self.filter(search_fields=search_fields)
            .sort()
            .project()
            .paginate(max_limit=max_limit)
        )
