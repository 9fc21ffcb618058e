# errors.py

class TokenAdvisorError(Exception):
    """Base class for every failure raised inside the analysis pipeline."""


class RetrievalError(TokenAdvisorError):
    """Market data could not be fetched, or the payload was malformed."""


class InsufficientDataError(TokenAdvisorError):
    """Fewer samples or days than a computation requires."""


class SeriesOrderError(TokenAdvisorError):
    """Price samples are not in strictly ascending timestamp order."""


class AdvisoryError(TokenAdvisorError):
    """The completion call failed or returned unusable content."""
