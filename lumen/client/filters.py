"""
Local filters for the admin list screens.

Each resource searches a few text fields (case-insensitive substring)
and narrows by one facet field; facet "all" keeps everything.
"""

FILTERS = {
    'blog': {'facet': 'category', 'search': ('title', 'author', 'category')},
    'classes': {'facet': 'status', 'search': ('name', 'instructor')},
    'coaches': {'facet': 'status', 'search': ('name', 'specialties')},
    'events': {'facet': 'status', 'search': ('title', 'type')},
    'products': {'facet': 'category', 'search': ('name', 'category')},
}

ALL = 'all'


def _text_of(value):
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ' '.join(str(item) for item in value)
    return str(value)


def matches_search(record, fields, search):
    term = (search or '').strip().lower()
    if not term:
        return True
    return any(term in _text_of(record.get(field)).lower() for field in fields)


def matches_facet(record, field, facet):
    if not facet or facet == ALL:
        return True
    return record.get(field) == facet


def filter_records(resource, records, search='', facet=ALL):
    """Records of `resource` matching both the search term and the facet"""
    fields = FILTERS[resource]
    return [
        record for record in records
        if matches_search(record, fields['search'], search)
        and matches_facet(record, fields['facet'], facet)
    ]
