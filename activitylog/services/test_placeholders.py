"""
Tests for description placeholders
"""

from django.test import TestCase
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from activitylog.models import Activity
from activitylog.services.placeholders import (
    data_get,
    replace_placeholders,
    to_generic_structure,
)

User = get_user_model()


class DataGetTestCase(TestCase):
    """Test dot notation lookups."""

    def test_nested_mapping(self):
        self.assertEqual(data_get({'foo': {'bar': 'baz'}}, 'foo.bar'), 'baz')

    def test_list_index(self):
        self.assertEqual(data_get({'tags': ['a', 'b']}, 'tags.1'), 'b')

    def test_list_index_out_of_range(self):
        self.assertEqual(data_get({'tags': ['a']}, 'tags.3', 'missing'), 'missing')

    def test_literal_dotted_key_wins(self):
        data = {'foo.bar': 'literal', 'foo': {'bar': 'nested'}}
        self.assertEqual(data_get(data, 'foo.bar'), 'literal')

    def test_missing_returns_default(self):
        self.assertIsNone(data_get({'foo': 'bar'}, 'foo.bar'))
        self.assertEqual(data_get({}, 'foo', 'default'), 'default')


class ToGenericStructureTestCase(TestCase):
    """Test conversion of subjects, causers and properties."""

    def test_model_instance(self):
        """Model instances expose their concrete fields and pk."""
        group = Group.objects.create(name='Editors')
        data = to_generic_structure(group)

        self.assertEqual(data['pk'], group.pk)
        self.assertEqual(data['id'], group.pk)
        self.assertEqual(data['name'], 'Editors')

    def test_user_password_left_out(self):
        user = User.objects.create_user(username='testuser', password='testpass123')
        data = to_generic_structure(user)

        self.assertEqual(data['username'], 'testuser')
        self.assertNotIn('password', data)

    def test_hidden_fields_left_out(self):
        group = Group.objects.create(name='Editors')
        group.activitylog_hidden_fields = ['name']

        data = to_generic_structure(group)
        self.assertNotIn('name', data)
        self.assertEqual(data['id'], group.pk)

    def test_mapping(self):
        self.assertEqual(to_generic_structure({'a': 1}), {'a': 1})

    def test_custom_converter(self):
        """Objects can provide their own structure."""
        class Custom:
            def to_generic_structure(self):
                return {'label': 'custom'}

        self.assertEqual(to_generic_structure(Custom()), {'label': 'custom'})

    def test_unsupported_value(self):
        self.assertIsNone(to_generic_structure(42))


class ReplacePlaceholdersTestCase(TestCase):
    """Test replace_placeholders()."""

    def setUp(self):
        """Set up test data."""
        self.user = User.objects.create_user(
            username='testuser',
            email='test@example.com',
            password='testpass123',
        )
        self.group = Group.objects.create(name='Editors')
        self.activity = Activity(properties={})

    def test_description_without_placeholders_unchanged(self):
        description = 'Nothing to see here: really.'
        self.assertEqual(replace_placeholders(description, self.activity), description)

    def test_unknown_root_left_verbatim(self):
        self.activity.properties = {'foo': 'bar'}
        self.assertEqual(
            replace_placeholders('Value :other.foo at 10:30', self.activity),
            'Value :other.foo at 10:30',
        )

    def test_root_is_case_sensitive(self):
        self.activity.subject = self.group
        self.assertEqual(
            replace_placeholders('On :Subject.name', self.activity),
            'On :Subject.name',
        )

    def test_nested_property(self):
        self.activity.properties = {'foo': {'bar': 'baz'}}
        self.assertEqual(
            replace_placeholders('did :properties.foo.bar', self.activity),
            'did baz',
        )

    def test_missing_subject_left_verbatim(self):
        self.assertEqual(
            replace_placeholders('on :subject.name', self.activity),
            'on :subject.name',
        )

    def test_subject_field(self):
        self.activity.subject = self.group
        self.assertEqual(
            replace_placeholders('Updated group :subject.name', self.activity),
            'Updated group Editors',
        )

    def test_causer_field(self):
        self.activity.causer = self.user
        self.assertEqual(
            replace_placeholders(':causer.username logged in', self.activity),
            'testuser logged in',
        )

    def test_causer_password_left_verbatim(self):
        self.activity.causer = self.user
        self.assertEqual(
            replace_placeholders('by :causer.password', self.activity),
            'by :causer.password',
        )

    def test_missing_path_left_verbatim(self):
        self.activity.properties = {'foo': 'bar'}
        self.assertEqual(
            replace_placeholders('Got :properties.missing', self.activity),
            'Got :properties.missing',
        )

    def test_empty_properties_left_verbatim(self):
        self.assertEqual(
            replace_placeholders('Got :properties.foo', self.activity),
            'Got :properties.foo',
        )

    def test_list_values(self):
        self.activity.properties = {'tags': ['urgent', 'billing']}
        self.assertEqual(
            replace_placeholders('Tagged :properties.tags.1', self.activity),
            'Tagged billing',
        )

    def test_none_value_renders_empty(self):
        self.activity.properties = {'note': None}
        self.assertEqual(
            replace_placeholders('note=:properties.note', self.activity),
            'note=',
        )

    def test_values_are_stringified(self):
        self.activity.properties = {'count': 3, 'paid': True}
        self.assertEqual(
            replace_placeholders(':properties.count items, paid: :properties.paid', self.activity),
            '3 items, paid: True',
        )

    def test_substitution_is_not_recursive(self):
        self.activity.properties = {'a': ':properties.b', 'b': 'resolved'}
        self.assertEqual(
            replace_placeholders('Value :properties.a', self.activity),
            'Value :properties.b',
        )

    def test_multiple_placeholders(self):
        self.activity.subject = self.group
        self.activity.causer = self.user
        self.activity.properties = {'role': 'admin'}
        self.assertEqual(
            replace_placeholders(
                ':causer.username added :subject.name as :properties.role',
                self.activity,
            ),
            'testuser added Editors as admin',
        )
