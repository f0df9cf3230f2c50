"""
Code fragment templates for the timestampable behavior.
"""

from ...core.templates import TemplateEngine, create_template_engine

OBJECT_ATTRIBUTES_TEMPLATE = """\
_keep_update_date_unchanged = False
"""

PRE_INSERT_TEMPLATE = """\
{% for source in sources %}
{{ source.variable }} = {{ source.expression }}
{% endfor %}
{% for column in columns %}
if not self.is_column_modified({{ column.constant }}):
    self.{{ column.setter }}({{ column.value }})
{% endfor %}
"""

PRE_UPDATE_TEMPLATE = """\
if (
    self.is_modified()
    and not self._keep_update_date_unchanged
    and not self.is_column_modified({{ column.constant }})
):
    self.{{ column.setter }}({{ column.value }})
"""

OBJECT_METHODS_TEMPLATE = '''\
def keep_update_date_unchanged(self, keep=True):
{% if add_comments %}
    """
    Mark the current object so that the update date doesn't get updated
    during the next save.

    Args:
        keep: Whether to keep the update date unchanged

    Returns:
        The current object, for fluent API support
    """
{% endif %}
    self._keep_update_date_unchanged = bool(keep)
    return self
'''

QUERY_METHODS_TEMPLATE = '''\
{% for method in methods %}
{% if not loop.first %}

{% endif %}
{% if method.kind == "recent" %}
def {{ method.name }}(self, nb_days=7):
{% if add_comments %}
    """
    {{ method.summary }}

    Args:
        nb_days: {{ method.argument }}

    Returns:
        The current query, for fluent interface
    """
{% endif %}
    self.add_using_alias(
        {{ method.constant }},
        int(time.time()) - nb_days * 24 * 60 * 60,
        Criteria.GREATER_EQUAL,
    )
    return self
{% else %}
def {{ method.name }}(self):
{% if add_comments %}
    """
    {{ method.summary }}

    Returns:
        The current query, for fluent interface
    """
{% endif %}
{% if method.kind == "desc" %}
    self.add_descending_order_by_column({{ method.constant }})
{% else %}
    self.add_ascending_order_by_column({{ method.constant }})
{% endif %}
    return self
{% endif %}
{% endfor %}
'''

_TEMPLATES = {
    "timestampable/object_attributes.py.j2": OBJECT_ATTRIBUTES_TEMPLATE,
    "timestampable/pre_insert.py.j2": PRE_INSERT_TEMPLATE,
    "timestampable/pre_update.py.j2": PRE_UPDATE_TEMPLATE,
    "timestampable/object_methods.py.j2": OBJECT_METHODS_TEMPLATE,
    "timestampable/query_methods.py.j2": QUERY_METHODS_TEMPLATE,
}

_engine = None


def get_template_engine() -> TemplateEngine:
    """Template engine preloaded with the timestampable fragments."""
    global _engine
    if _engine is None:
        engine = create_template_engine()
        for name, content in _TEMPLATES.items():
            engine.add_template(name, content)
        _engine = engine
    return _engine
