"""
Error taxonomy for the feed pipeline and the HTTP surface.
Each error knows the status code and label of the page it maps to.
"""


class RSSViewError(Exception):
    """Base class for errors rendered as an error page"""
    status_code = 500
    label = "Error"

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return f"{self.label}: {self.text}"


class NotFoundError(RSSViewError):
    """Unmatched route or missing static asset"""
    status_code = 404
    label = "NotFoundError"


class BadRequestError(RSSViewError):
    """Missing or malformed query parameters"""
    status_code = 400
    label = "BadRequestError"


class FetchError(RSSViewError):
    """Transport failure while retrieving the feed"""
    status_code = 400
    label = "FetchError"


class ParseError(RSSViewError):
    """Feed body could not be parsed"""
    status_code = 400
    label = "ParseError"


class RenderError(RSSViewError):
    """Template rendering failed"""
    status_code = 500
    label = "RenderError"
