# weedclient/common/exceptions.py
class WeedFSError(Exception):
    """Base exception for the weed-fs client"""

    def __init__(self, message: str, body: str = None):
        super().__init__(message)
        self.message = message
        self.body = body


class WeedFSTransportError(WeedFSError):
    """Raised when the master or a storage node cannot be reached.

    Also used by the status calls for any non-200 response, which do not
    get a typed status error.
    """

    pass


class ResponseParseError(WeedFSError):
    """Raised when a response body cannot be decoded.

    ``content`` holds the exact bytes received and ``body`` their text, with
    invalid UTF-8 shown as backslash escapes.
    """

    def __init__(self, message: str, body: str = None, content: bytes = None):
        super().__init__(message, body)
        self.content = content


class SemanticError(WeedFSError):
    """Raised when a decoded response carries a non-empty ``error`` field"""

    pass


class AssignmentError(SemanticError):
    """Raised when the master refuses to assign a file id"""

    pass


class VolumeLookupError(SemanticError):
    """Raised when the master cannot resolve a volume id"""

    pass


class WriteError(SemanticError):
    """Raised when a storage node rejects an upload"""

    pass


class HttpStatusError(WeedFSError):
    """Raised when a storage node answers with an unexpected status"""

    def __init__(
        self, message: str, status_code: int, reason: str = "", body: str = None
    ):
        super().__init__(message, body)
        self.status_code = status_code
        self.reason = reason


class ReadError(HttpStatusError):
    pass


class DeleteError(HttpStatusError):
    pass


class WeedFSFileNotFoundError(WeedFSError):
    """Raised when a storage node does not hold the requested file"""

    def __init__(self, file, location):
        super().__init__(f"File {file.fid} not found on {location.public_url}")
        self.file = file
        self.location = location
