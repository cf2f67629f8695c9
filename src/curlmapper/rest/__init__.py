from .exceptions import CurlMapperClientError, CurlParseError, DispatchError, RunnerBusyError
from .models import DispatchResult, JobLog, JobStatus, RunStats
from .curl import parse_curl
from .client import RequestDispatcher
from .runner import BatchRunner, RunnerConfig

__all__ = [
    "CurlMapperClientError",
    "CurlParseError",
    "DispatchError",
    "RunnerBusyError",
    "DispatchResult",
    "JobLog",
    "JobStatus",
    "RunStats",
    "parse_curl",
    "RequestDispatcher",
    "BatchRunner",
    "RunnerConfig",
]
