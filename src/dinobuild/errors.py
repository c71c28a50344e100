"""Exception hierarchy for dinobuild.

Callers can catch ``BuildError`` for any fatal failure of an invocation, or
one of the subclasses for a specific stage. An empty build result is not an
error and has no exception here.
"""


class BuildError(Exception):
    """Base exception for all dinobuild errors."""


class ConfigurationError(BuildError):
    """Missing or invalid command-line configuration (e.g. no target)."""


class StagingError(BuildError):
    """The temporary build context could not be created or populated."""


class PackagingError(BuildError):
    """The staged context could not be packaged into a tar stream."""


class BuildSubmissionError(BuildError):
    """The daemon was unreachable, rejected the build, or the upload failed."""
