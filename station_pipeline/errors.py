class PipelineError(RuntimeError):
    """Base error for the station data pipeline."""


class FetchError(PipelineError):
    """Network failure or non-success HTTP status while downloading the CSV."""


class ParseError(PipelineError):
    """The CSV was empty or could not be tokenized."""


class CacheError(PipelineError):
    """The cache store could not be read or written."""


__all__ = ["PipelineError", "FetchError", "ParseError", "CacheError"]
