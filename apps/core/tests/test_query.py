"""
QueryPipeline Tests
===================

Tests for the query-string → QuerySet pipeline used by every list endpoint.

Test Coverage:
1. parse_query_params - QueryDict → plain values
2. filter   - equality, IN, range operators, boolean strings, search
3. sort     - default order, multi-key order, invalid keys
4. project  - ?fields= and the hidden revision counter
5. paginate - page/limit parsing, skip, max_limit, offsets past 64-bit range
6. apply    - full chain, composition of stages, repeatability, default window

Run tests:
    python manage.py test apps.core.tests.test_query
"""

import datetime

from django.http import QueryDict
from django.test import TestCase
from django.utils import timezone

from apps.accounts.models import User
from apps.core.exceptions import QueryParamError
from apps.core.models import Company
from apps.core.query import DEFAULT_LIMIT, MAX_OFFSET, QueryPipeline, parse_query_params


def make_companies(names, **fields):
    """Create companies whose created_at grows with their position in `names`"""
    base = timezone.now() - datetime.timedelta(days=len(names))
    companies = []
    for index, name in enumerate(names):
        company = Company.objects.create(name=name, **fields)
        Company.objects.filter(pk=company.pk).update(created_at=base + datetime.timedelta(days=index))
        companies.append(company)
    return companies


def names(pipeline):
    return [company.name for company in pipeline.queryset]


class ParseQueryParamsTest(TestCase):
    """Test QueryDict parsing at the request boundary"""

    def test_single_value(self):
        params = parse_query_params(QueryDict('lead_status=New'))
        self.assertEqual(params, {'lead_status': 'New'})

    def test_repeated_key_becomes_list(self):
        params = parse_query_params(QueryDict('priority=High&priority=Low'))
        self.assertEqual(params, {'priority': ['High', 'Low']})

    def test_empty_brackets_become_list(self):
        params = parse_query_params(QueryDict('priority[]=High'))
        self.assertEqual(params, {'priority': ['High']})

    def test_operator_brackets_become_mapping(self):
        params = parse_query_params(QueryDict('water_area[gte]=5&water_area[lt]=20'))
        self.assertEqual(params, {'water_area': {'gte': '5', 'lt': '20'}})

    def test_reserved_keys_keep_last_value(self):
        params = parse_query_params(QueryDict('page=1&page=3&sort=name'))
        self.assertEqual(params['page'], '3')
        self.assertEqual(params['sort'], 'name')

    def test_plain_and_operator_for_same_field_conflict(self):
        with self.assertRaises(QueryParamError):
            parse_query_params(QueryDict('country=India&country[gte]=A'))


class FilterTest(TestCase):
    """Test the filter stage"""

    def setUp(self):
        self.alpha, self.beta, self.gamma = make_companies(['Alpha', 'Beta', 'Gamma'])
        Company.objects.filter(pk=self.alpha.pk).update(lead_status='Qualified', country='India')
        Company.objects.filter(pk=self.beta.pk).update(lead_status='New', country='Spain')
        Company.objects.filter(pk=self.gamma.pk).update(lead_status='Won', country='India')

    def test_no_params_returns_everything(self):
        pipeline = QueryPipeline(Company.objects.all(), {}).filter()
        self.assertEqual(pipeline.queryset.count(), 3)

    def test_equality(self):
        pipeline = QueryPipeline(Company.objects.all(), {'country': 'India'}).filter()
        self.assertEqual(set(names(pipeline)), {'Alpha', 'Gamma'})

    def test_list_means_in(self):
        pipeline = QueryPipeline(Company.objects.all(), {'lead_status': ['New', 'Won']}).filter()
        self.assertEqual(set(names(pipeline)), {'Beta', 'Gamma'})

    def test_range_operators(self):
        Company.objects.filter(pk=self.alpha.pk).update(next_follow_up_date=datetime.date(2025, 1, 10))
        Company.objects.filter(pk=self.beta.pk).update(next_follow_up_date=datetime.date(2025, 2, 10))
        Company.objects.filter(pk=self.gamma.pk).update(next_follow_up_date=datetime.date(2025, 3, 10))

        params = QueryDict('next_follow_up_date[gte]=2025-02-01&next_follow_up_date[lt]=2025-03-10')
        pipeline = QueryPipeline(Company.objects.all(), params).filter()

        self.assertEqual(names(pipeline), ['Beta'])

    def test_operator_word_as_value_is_not_rewritten(self):
        """A literal value "gte" is matched as-is"""
        Company.objects.filter(pk=self.beta.pk).update(lead_status='gte')

        pipeline = QueryPipeline(Company.objects.all(), QueryDict('lead_status=gte')).filter()

        self.assertEqual(names(pipeline), ['Beta'])

    def test_unknown_operator_rejected(self):
        with self.assertRaises(QueryParamError):
            QueryPipeline(Company.objects.all(), QueryDict('name[regex]=^A')).filter()

    def test_unknown_field_rejected(self):
        with self.assertRaises(QueryParamError):
            QueryPipeline(Company.objects.all(), {'not_a_field': 'x'}).filter()

    def test_lookup_traversal_rejected(self):
        with self.assertRaises(QueryParamError):
            QueryPipeline(Company.objects.all(), {'contacts__email': 'a@b.com'}).filter()

    def test_value_of_wrong_type_rejected(self):
        with self.assertRaises(QueryParamError):
            QueryPipeline(Company.objects.all(), {'next_follow_up_date': 'not-a-date'}).filter()

    def test_reserved_keys_are_not_filters(self):
        params = {'page': '2', 'limit': '1', 'sort': 'name', 'fields': 'name', 'search': ''}
        pipeline = QueryPipeline(Company.objects.all(), params).filter()
        self.assertEqual(pipeline.queryset.count(), 3)

    def test_search_matches_any_search_field(self):
        pipeline = QueryPipeline(Company.objects.all(), {'search': 'alp'}).filter(search_fields=('name',))
        self.assertEqual(names(pipeline), ['Alpha'])

    def test_search_ignored_without_search_fields(self):
        pipeline = QueryPipeline(Company.objects.all(), {'search': 'alp'}).filter()
        self.assertEqual(pipeline.queryset.count(), 3)

    def test_search_combines_with_filters(self):
        params = {'search': 'a', 'country': 'Spain'}
        pipeline = QueryPipeline(Company.objects.all(), params).filter(search_fields=('name',))
        self.assertEqual(names(pipeline), ['Beta'])

    def test_boolean_strings_match_boolean_fields(self):
        User.objects.create_user(email='active@test.com', password='S3cure-pass-42', name='Active')
        User.objects.create_user(email='left@test.com', password='S3cure-pass-42', name='Left', is_active=False)

        cases = [
            ('true', ['active@test.com']),
            ('True', ['active@test.com']),
            ('1', ['active@test.com']),
            ('false', ['left@test.com']),
            ('0', ['left@test.com']),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                pipeline = QueryPipeline(User.objects.all(), {'is_active': value}).filter()
                self.assertEqual([user.email for user in pipeline.queryset], expected)

    def test_boolean_list_and_nonsense(self):
        User.objects.create_user(email='active@test.com', password='S3cure-pass-42', name='Active')
        User.objects.create_user(email='left@test.com', password='S3cure-pass-42', name='Left', is_active=False)

        pipeline = QueryPipeline(User.objects.all(), {'is_active': ['true', 'false']}).filter()
        self.assertEqual(pipeline.queryset.count(), 2)

        with self.assertRaises(QueryParamError):
            QueryPipeline(User.objects.all(), {'is_active': 'maybe'}).filter()

    def test_hidden_field_cannot_be_filtered(self):
        User.objects.create_user(email='admin@test.com', password='S3cure-pass-42', name='Admin')

        with self.assertRaises(QueryParamError):
            QueryPipeline(User.objects.all(), {'password': 'x'}, hidden_fields=('password',)).filter()


class SortTest(TestCase):
    """Test the sort stage"""

    def setUp(self):
        make_companies(['Beta', 'Alpha', 'Gamma'])

    def test_default_is_newest_first(self):
        pipeline = QueryPipeline(Company.objects.all(), {}).sort()
        self.assertEqual(names(pipeline), ['Gamma', 'Alpha', 'Beta'])

    def test_ascending_and_descending(self):
        self.assertEqual(names(QueryPipeline(Company.objects.all(), {'sort': 'name'}).sort()),
                         ['Alpha', 'Beta', 'Gamma'])
        self.assertEqual(names(QueryPipeline(Company.objects.all(), {'sort': '-name'}).sort()),
                         ['Gamma', 'Beta', 'Alpha'])

    def test_multiple_keys_in_order(self):
        Company.objects.filter(name__in=['Alpha', 'Gamma']).update(priority='High')
        Company.objects.filter(name='Beta').update(priority='Low')

        pipeline = QueryPipeline(Company.objects.all(), {'sort': 'priority,-name'}).sort()

        self.assertEqual(names(pipeline), ['Gamma', 'Alpha', 'Beta'])

    def test_blank_items_are_ignored(self):
        pipeline = QueryPipeline(Company.objects.all(), {'sort': ' name, ,'}).sort()
        self.assertEqual(names(pipeline), ['Alpha', 'Beta', 'Gamma'])

    def test_unknown_sort_key_rejected(self):
        with self.assertRaises(QueryParamError):
            QueryPipeline(Company.objects.all(), {'sort': 'shoe_size'}).sort()


class ProjectTest(TestCase):
    """Test the projection stage"""

    def setUp(self):
        make_companies(['Alpha'])

    def test_fields_loads_only_those(self):
        company = QueryPipeline(Company.objects.all(), {'fields': 'name,country'}).project().queryset.get()

        deferred = company.get_deferred_fields()
        self.assertNotIn('name', deferred)
        self.assertNotIn('country', deferred)
        self.assertIn('industry', deferred)
        self.assertIn('revision', deferred)

    def test_default_hides_revision_only(self):
        company = QueryPipeline(Company.objects.all(), {}).project().queryset.get()
        self.assertEqual(company.get_deferred_fields(), {'revision'})

    def test_revision_can_be_requested(self):
        company = QueryPipeline(Company.objects.all(), {'fields': 'revision'}).project().queryset.get()
        self.assertNotIn('revision', company.get_deferred_fields())

    def test_unknown_field_rejected(self):
        with self.assertRaises(QueryParamError):
            QueryPipeline(Company.objects.all(), {'fields': 'name,nope'}).project()

    def test_hidden_fields_deferred_and_not_selectable(self):
        User.objects.create_user(email='user@test.com', password='S3cure-pass-42', name='User')

        user = QueryPipeline(User.objects.all(), {}, hidden_fields=('password',)).project().queryset.get()
        self.assertIn('password', user.get_deferred_fields())

        with self.assertRaises(QueryParamError):
            QueryPipeline(User.objects.all(), {'fields': 'email,password'}, hidden_fields=('password',)).project()


class PaginateTest(TestCase):
    """Test the pagination stage"""

    def setUp(self):
        make_companies([f'Company {i}' for i in range(5)])

    def paginate(self, params, **kwargs):
        return QueryPipeline(Company.objects.order_by('name'), params).paginate(**kwargs)

    def test_defaults(self):
        pipeline = self.paginate({})
        self.assertEqual((pipeline.page, pipeline.limit, pipeline.skip), (1, DEFAULT_LIMIT, 0))
        self.assertEqual(len(names(pipeline)), 5)

    def test_page_and_limit(self):
        pipeline = self.paginate({'page': '2', 'limit': '2'})
        self.assertEqual(pipeline.skip, 2)
        self.assertEqual(names(pipeline), ['Company 2', 'Company 3'])

    def test_last_partial_page(self):
        self.assertEqual(names(self.paginate({'page': '3', 'limit': '2'})), ['Company 4'])

    def test_page_past_the_end_is_empty(self):
        self.assertEqual(names(self.paginate({'page': '10', 'limit': '2'})), [])

    def test_invalid_values_fall_back_to_defaults(self):
        for value in ('abc', '0', '-3', '1.5', '', 'inf'):
            with self.subTest(value=value):
                pipeline = self.paginate({'page': value, 'limit': value})
                self.assertEqual(pipeline.page, 1)
                self.assertEqual(pipeline.limit, DEFAULT_LIMIT)

    def test_whole_number_float_accepted(self):
        self.assertEqual(self.paginate({'limit': '2.0'}).limit, 2)

    def test_max_limit_caps_page_size(self):
        pipeline = self.paginate({'limit': '5000'}, max_limit=3)
        self.assertEqual(pipeline.limit, 3)
        self.assertEqual(len(names(pipeline)), 3)

    def test_custom_default_limit(self):
        pipeline = QueryPipeline(Company.objects.all(), {}, default_limit=20).paginate()
        self.assertEqual(pipeline.limit, 20)

    def test_offset_past_database_range_is_empty(self):
        for page in ('100000000000000000000', '1e300'):
            with self.subTest(page=page):
                pipeline = self.paginate({'page': page})
                self.assertGreater(pipeline.skip, MAX_OFFSET)
                self.assertEqual(names(pipeline), [])

    def test_huge_limit_is_bounded(self):
        pipeline = self.paginate({'limit': '1e300'})

        self.assertEqual(pipeline.limit, MAX_OFFSET)
        self.assertEqual(len(names(pipeline)), 5)


class ApplyTest(TestCase):
    """Test the full filter → sort → project → paginate chain"""

    def setUp(self):
        make_companies(['Delta', 'Alpha', 'Charlie', 'Bravo', 'Echo'], country='India')
        make_companies(['Foxtrot'], country='Spain')

    def test_builds_query_without_touching_database(self):
        with self.assertNumQueries(0):
            QueryPipeline(Company.objects.all(), QueryDict('country=India&sort=name&page=2&limit=2')).apply()

    def test_stages_compose(self):
        params = QueryDict('country=India&sort=name&fields=name&page=2&limit=2')

        pipeline = QueryPipeline(Company.objects.all(), params).apply()

        self.assertEqual(names(pipeline), ['Charlie', 'Delta'])

    def test_pages_cover_filtered_set_exactly_once(self):
        seen = []
        for page in (1, 2, 3):
            params = {'country': 'India', 'sort': 'name', 'page': str(page), 'limit': '2'}
            seen.extend(names(QueryPipeline(Company.objects.all(), params).apply()))

        self.assertEqual(seen, ['Alpha', 'Bravo', 'Charlie', 'Delta', 'Echo'])

    def test_search_through_apply(self):
        pipeline = QueryPipeline(Company.objects.all(), {'search': 'ECH'}).apply(search_fields=('name',))
        self.assertEqual(names(pipeline), ['Echo'])

    def test_same_params_on_fresh_querysets_give_same_rows(self):
        params = QueryDict('country=India&sort=-created_at&fields=name&page=1&limit=3')

        first = names(QueryPipeline(Company.objects.all(), params).apply())
        second = names(QueryPipeline(Company.objects.all(), params).apply())

        self.assertEqual(first, second)
        self.assertEqual(first, ['Echo', 'Bravo', 'Charlie'])


class ListScenarioTest(TestCase):
    """Whole-request scenarios over larger tables"""

    def test_newest_five_of_twelve_matching(self):
        make_companies([f'New {i:02d}' for i in range(12)], lead_status='New')
        make_companies(['Won 1', 'Won 2'], lead_status='Won')

        params = {'lead_status': 'New', 'page': '1', 'limit': '5', 'sort': '-created_at'}
        pipeline = QueryPipeline(Company.objects.all(), params).apply()

        self.assertEqual(names(pipeline), ['New 11', 'New 10', 'New 09', 'New 08', 'New 07'])

    def test_bare_request_returns_newest_hundred(self):
        make_companies([f'Company {i:03d}' for i in range(105)])

        rows = list(QueryPipeline(Company.objects.all(), {}).apply().queryset)

        self.assertEqual(len(rows), DEFAULT_LIMIT)
        self.assertEqual(rows[0].name, 'Company 104')
        self.assertEqual(rows[-1].name, 'Company 005')
        self.assertEqual(rows[0].get_deferred_fields(), {'revision'})
