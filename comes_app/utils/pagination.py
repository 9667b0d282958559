# File: comes_app/utils/pagination.py
# Pagination helpers for SQLAlchemy queries and list endpoints.

from flask import current_app, request

from ..core.error_handlers import ValidationError


def get_page_args():
    """Read ``page`` and ``limit`` from the query string and validate them."""

    default_limit = current_app.config.get('ITEMS_PER_PAGE', 10)
    max_limit = current_app.config.get('MAX_ITEMS_PER_PAGE', 100)

    errors = {}
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', default_limit, type=int)
    if page is None or page < 1:
        errors['page'] = 'Page must be a positive integer'
    if limit is None or limit < 1 or limit > max_limit:
        errors['limit'] = f'Limit must be between 1 and {max_limit}'
    if errors:
        raise ValidationError('Validation failed', errors)
    return page, limit


def get_pagination_data(query, page, per_page=None):
    """Paginate a SQLAlchemy query."""

    if per_page is None:
        per_page = current_app.config.get('ITEMS_PER_PAGE', 10)

    # error_out=False: an out-of-range page returns an empty list instead of 404
    return query.paginate(page=page, per_page=per_page, error_out=False)


def pagination_meta(pagination) -> dict:
    """Describe a pagination object for JSON responses."""

    return {
        'page': pagination.page,
        'limit': pagination.per_page,
        'total': pagination.total,
        'pages': pagination.pages,
    }
