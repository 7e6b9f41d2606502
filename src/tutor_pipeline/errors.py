"""Exception types raised by the build pipeline."""


class PipelineError(Exception):
    """Base class for pipeline failures that stop a CLI run."""


class OutputDirectoryError(PipelineError):
    """Output directory could not be cleared, created, scanned or written."""


class AssetNotFoundError(PipelineError):
    """No generated asset exists for the requested lookup."""
