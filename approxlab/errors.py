"""
Exceptions raised by approxlab.
"""


class ConfigurationError(ValueError):
    """
    Raised when an evaluation is requested with invalid parameters.

    Evaluators check their inputs before any sampling or timing loop runs,
    so a ConfigurationError always means no computation was performed.
    """
    pass
