"""Submission status enumeration.

Terminal outcomes of a submission driven by the retry orchestrator.
"""

from enum import Enum


class SubmissionStatus(Enum):
    """Status codes for submission results.

    Attributes:
        SUCCESS: The network confirmed the operation
        EXHAUSTED: Recoverable failures used up the retry budget or deadline
        UNRECOVERABLE: A failure that retrying cannot fix
    """

    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    UNRECOVERABLE = "unrecoverable"
