"""
Railway-Oriented Programming (ROP) toolkit for Python.

Two-track Result values, stage adapters, and a pipe() that composes
synchronous and asynchronous stages without the caller choosing up front.

    from railway import Success, pipe
    from railway import adapters as rop

    register = pipe(
        Success,
        rop.flat_map(validate_name),
        rop.flat_map(validate_age),
        rop.map(capitalize_name),
    )
    register(user)  # → Success(User(name='JOHN', ...)) or Failure(fault)
"""

from railway import adapters
from railway.adapters import flat_map, guard, railway_pipe, tap
from railway.assertions import ResultAssertions
from railway.failure import Fault, FaultCatalog, fault_code
from railway.pipe import is_suspended, mapped_pipe, pipe, run_pipe
from railway.result import Failure, Result, Success, match

__all__ = [
    "Result",
    "Success",
    "Failure",
    "match",
    "adapters",
    "flat_map",
    "guard",
    "tap",
    "railway_pipe",
    "pipe",
    "mapped_pipe",
    "run_pipe",
    "is_suspended",
    "Fault",
    "FaultCatalog",
    "fault_code",
    "ResultAssertions",
]

__version__ = "1.0.0"
