"""Application error type carrying a machine-readable code and caller context."""

import inspect
import uuid
from enum import Enum


class AppErrorCode(str, Enum):
    E_INVALID_CONFIG = "E_INVALID_CONFIG"
    E_AUTH_FAILED = "E_AUTH_FAILED"
    E_CLIENT_NOT_READY = "E_CLIENT_NOT_READY"
    E_MEDIA_SERVICE_ERROR = "E_MEDIA_SERVICE_ERROR"
    E_RESOURCE_NOT_FOUND = "E_RESOURCE_NOT_FOUND"
    E_PROVISION_FAILED = "E_PROVISION_FAILED"
    E_CLEANUP_FAILED = "E_CLEANUP_FAILED"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"


class AppError(Exception):
    """Raised for failures the orchestrator reports instead of crashing.

    Attributes:
        errcode: AppErrorCode value as a plain string
        errmesg: Human readable message
        erresid: Short random id used to correlate log lines with results
        caller_info: module:function:line of the raise site
    """

    def __init__(self, errcode: AppErrorCode | str, errmesg: str):
        self.errcode = errcode.value if isinstance(errcode, AppErrorCode) else str(errcode)
        self.errmesg = errmesg
        self.erresid = uuid.uuid4().hex[:12]

        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        if caller is not None:
            module = inspect.getmodule(caller)
            module_name = module.__name__ if module else caller.f_code.co_filename
            self.caller_info = f"{module_name}:{caller.f_code.co_name}:{caller.f_lineno}"
        else:
            self.caller_info = "unknown"
        del frame, caller

        super().__init__(f"{self.errcode}: {errmesg}")
