"""Result type for fallible operations.

- Result/Ok/Err: success-or-failure value returned by every attempt
- try_call/try_call_async: run a raising callable and capture its outcome
"""

from .result import Err, Ok, Result, try_call, try_call_async

__all__ = ["Result", "Ok", "Err", "try_call", "try_call_async"]
