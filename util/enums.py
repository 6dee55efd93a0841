# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    INVALID_CHARSET = ErrorInfo(
        "Tokens, task keys and labels must be [A-Za-z0-9_.-]",
        status.HTTP_400_BAD_REQUEST,
    )
    INVALID_FIELD = ErrorInfo(
        "Field names may not contain ':'", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    BAD_STRUCTURE = ErrorInfo("Malformed store key", status.HTTP_400_BAD_REQUEST)
    INVALID_NUMBER = ErrorInfo(
        "Expected a 64-bit integer or 'null'", status.HTTP_400_BAD_REQUEST
    )
    REPORT_REJECTED = ErrorInfo(
        "Some updates could not be parsed; nothing was written",
        status.HTTP_400_BAD_REQUEST,
    )
    STORE_UNAVAILABLE = ErrorInfo(
        "State store unavailable", status.HTTP_503_SERVICE_UNAVAILABLE
    )
    INTERNAL_ERROR = ErrorInfo("Internal Error", status.HTTP_500_INTERNAL_SERVER_ERROR)
