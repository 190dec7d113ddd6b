# pylint: disable=duplicate-code
"""Output helpers and callable metadata."""

import inspect
import os
import sys
from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["debug", "error", "FunctionDetails", "get_function_details"]


def debug(msg):
    if os.environ.get("DEBUG", False):
        print(msg)


def error(msg):
    print(msg, file=sys.stderr)


@dataclass
class FunctionDetails:
    """Captured metadata about a callable."""
    name: str
    line: int
    file: str


def get_function_details(obj: Callable[..., Any]) -> FunctionDetails:
    """Extract function name, line number, and file path."""
    if inspect.isfunction(obj) or inspect.ismethod(obj):
        name = obj.__name__
        line_number = inspect.getsourcelines(obj)[1]
        file_name = inspect.getfile(obj)
        return FunctionDetails(name=name, line=line_number, file=file_name)

    raise ValueError(f"Unsupported object type {type(obj)} - expected function or method")
