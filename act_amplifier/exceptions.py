"""Exceptions raised by Search Term Amplifier."""


class AmplifierError(Exception):
    """Base exception for all amplifier errors."""


class InvalidMatchType(AmplifierError, ValueError):
    """Raised when a match type is not EXACT, PHRASE or BROAD."""

    def __init__(self, match_type):
        super().__init__(
            f"Invalid match type {match_type!r}. Match type should be selected "
            "from EXACT, PHRASE, or BROAD"
        )
        self.match_type = match_type


class MultipleMatchesError(AmplifierError):
    """Raised when a keyword identity matches more than one keyword."""

    def __init__(self, keyword_text: str, ad_group_name: str, match_type: str, count: int):
        super().__init__(
            f"Unexpected error: {count} keywords found while looking for keyword: "
            f"{keyword_text} in ad group: {ad_group_name} with match type: {match_type}"
        )
        self.keyword_text = keyword_text
        self.ad_group_name = ad_group_name
        self.match_type = match_type
        self.count = count


class AdGroupResolutionError(AmplifierError):
    """Raised when the destination ad group is missing or ambiguous."""


class ConfigError(AmplifierError):
    """Raised when the amplifier configuration is invalid."""

    def __init__(self, message: str, errors: list = None):
        super().__init__(message)
        self.errors = errors or []
