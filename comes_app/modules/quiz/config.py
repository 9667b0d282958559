# File: comes_app/modules/quiz/config.py


class QuizDefaultConfig:
    """
    Default settings for the Quiz module.
    """
    ANSWERS_PER_QUESTION = 4
    MIN_TIME_LIMIT_SECONDS = 5
    MAX_TIME_LIMIT_SECONDS = 300

    # Share of a question's marks granted for any correct answer, however slow
    MIN_CREDIT_FRACTION = 0.1

    # Sortable columns for the quiz listing (prefix with '-' for descending)
    LIST_SORT_FIELDS = ('created_at', 'updated_at', 'title')
    LIST_DEFAULT_SORT = '-created_at'

    ATTEMPT_SORT_RECENT = 'recent'
