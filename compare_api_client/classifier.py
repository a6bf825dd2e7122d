"""
Translation of transport faults into public errors.
"""

from typing import Sequence, Type

from .exceptions import RequestError, UnknownResponseError
from .transport import UnexpectedResponseError


def classify(fault: UnexpectedResponseError, kinds: Sequence[Type[RequestError]]) -> RequestError:
    """
    Map a transport fault to the first error kind that matches its status.

    Each operation passes the kinds it can legitimately produce, in priority
    order. Anything else becomes an UnknownResponseError.
    """
    for kind in kinds:
        if kind.matches(fault.actual_status):
            return kind.from_fault(fault)
    return UnknownResponseError.from_fault(fault)
