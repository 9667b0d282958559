# modules/competition_team/config.py


class TeamDefaultConfig:
    """
    Default settings for competition teams.
    """
    NAME_MIN_LENGTH = 2
    NAME_MAX_LENGTH = 100

    RESPONSE_APPROVED = 'approved'
    RESPONSE_REJECTED = 'rejected'
    RESPONSES = (RESPONSE_APPROVED, RESPONSE_REJECTED)
