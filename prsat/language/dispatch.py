"""Dispatch namespace shared by the recursive tree functions."""

from functools import partial
from typing import Any

from multipledispatch import dispatch

namespace: dict[str, Any] = {}

dispatch = partial(dispatch, namespace=namespace)
