"""
Exceptions raised by the site collaborators

The markdown engine itself never raises; these cover metadata, dates and
file layout problems, which the CLI reports and turns into exit status 1.
"""


class ZineError(Exception):
    """Base class for recoverable site build errors"""
    pass


class DateFormatError(ZineError):
    """Raised when a date value is not a valid YYYY-MM-DD date"""
    pass


class SiteError(ZineError):
    """Raised when site metadata or an article source cannot be loaded"""
    pass
