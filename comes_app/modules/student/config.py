# modules/student/config.py


class StudentDefaultConfig:
    """
    Default settings for the Student directory.
    """
    SEARCH_MIN_LENGTH = 2
    SEARCH_LIMIT = 10
