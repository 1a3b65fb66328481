"""
Placeholder substitution for activity descriptions.

Descriptions may reference the activity's own attributes:

    :subject.<path>      fields of the subject
    :causer.<path>       fields of the causer
    :properties.<path>   values from the properties

Paths use dot notation to reach nested values, e.g.
``:properties.attributes.name``. Placeholders that cannot be resolved are
left in the text as written.
"""

import re
from collections.abc import Mapping
from typing import Any

from django.contrib.auth.base_user import AbstractBaseUser
from django.db.models import Model


PLACEHOLDER_PATTERN = re.compile(r':[a-z0-9._-]+', re.IGNORECASE)
PLACEHOLDER_ROOTS = ('subject', 'causer', 'properties')

_MISSING = object()


def to_generic_structure(value: Any) -> Any:
    """
    Convert a subject, causer or properties value into plain dicts and lists.

    Objects may provide their own ``to_generic_structure()``. Model instances
    become a dict of their concrete field values, with foreign keys under
    both the field name and the attname (``owner`` and ``owner_id``).
    Fields named in the model's ``activitylog_hidden_fields`` are left out,
    as is the password of user models.

    Returns:
        dict or list, or None if the value cannot be converted
    """
    converter = getattr(value, 'to_generic_structure', None)
    if callable(converter):
        return converter()

    if isinstance(value, Model):
        hidden = set(getattr(value, 'activitylog_hidden_fields', ()))
        if isinstance(value, AbstractBaseUser):
            hidden.add('password')

        data = {'pk': value.pk}
        for field in value._meta.concrete_fields:
            if field.name in hidden:
                continue
            field_value = field.value_from_object(value)
            data[field.attname] = field_value
            data[field.name] = field_value
        return data

    if isinstance(value, Mapping):
        return dict(value)

    if isinstance(value, (list, tuple)):
        return list(value)

    return None


def data_get(target: Any, path: str, default: Any = None) -> Any:
    """
    Get a nested value using dot notation.

    A key equal to the whole path wins over walking the segments.

    Examples:
        >>> data_get({'foo': {'bar': 'baz'}}, 'foo.bar')
        'baz'
        >>> data_get({'items': ['a', 'b']}, 'items.1')
        'b'
        >>> data_get({'foo.bar': 1}, 'foo.bar')
        1
    """
    if isinstance(target, Mapping) and path in target:
        return target[path]

    for segment in path.split('.'):
        if isinstance(target, Mapping) and segment in target:
            target = target[segment]
        elif isinstance(target, (list, tuple)) and segment.isdigit() and int(segment) < len(target):
            target = target[int(segment)]
        else:
            return default
    return target


def _resolve_placeholder(placeholder: str, activity) -> str:
    token = placeholder[1:]
    root, _, path = token.partition('.')

    if root not in PLACEHOLDER_ROOTS:
        return placeholder

    attribute_value = getattr(activity, root, None)
    if attribute_value is None:
        return placeholder

    structure = to_generic_structure(attribute_value)
    if structure is None:
        return placeholder

    value = data_get(structure, path or root, _MISSING)
    if value is _MISSING:
        return placeholder
    return '' if value is None else str(value)


def replace_placeholders(description: str, activity) -> str:
    """
    Render a description against an activity's subject, causer and properties.

    Substituted values are not scanned again for placeholders.

    Args:
        description: Text containing placeholders
        activity: Activity whose attributes are referenced

    Returns:
        Rendered description

    Example:
        >>> activity.properties = {'foo': {'bar': 'baz'}}
        >>> replace_placeholders('did :properties.foo.bar', activity)
        'did baz'
    """
    return PLACEHOLDER_PATTERN.sub(
        lambda match: _resolve_placeholder(match.group(0), activity),
        description,
    )
