class CurlMapperClientError(Exception):
    """Base exception for all client errors."""


class CurlParseError(CurlMapperClientError):
    """Raised when a cURL command cannot be turned into a request config."""


class DispatchError(CurlMapperClientError):
    """Raised when a dispatcher is misconfigured or used after close()."""


class RunnerBusyError(CurlMapperClientError):
    """Raised when a batch run is started while another one is in progress."""
