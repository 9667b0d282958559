"""URL converters shared by the API blueprints."""

from werkzeug.routing import IntegerConverter

# Largest value a signed 64-bit integer column can hold
MAX_ID = 2 ** 63 - 1


class IdConverter(IntegerConverter):
    """Positive integer ids. Values a database id cannot hold do not match, so they 404."""

    def __init__(self, map, *args, **kwargs):
        kwargs.setdefault('min', 1)
        kwargs.setdefault('max', MAX_ID)
        super().__init__(map, *args, **kwargs)
