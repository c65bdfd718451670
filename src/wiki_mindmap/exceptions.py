"""
Custom exceptions for wiki_mindmap.
"""

class WikiMindMapException(Exception):
    """Base exception for the application."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class InvalidTitleError(WikiMindMapException, ValueError):
    """Raised when a start or target title is empty or not a string."""
    pass

class SearchCancelledError(WikiMindMapException):
    """Raised when a caller cancels a running search."""
    pass

class WikiServiceUnavailableException(WikiMindMapException):
    """Raised when the Wikipedia API cannot be used at all (e.g. client not opened)."""
    pass
