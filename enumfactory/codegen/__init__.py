"""
Source emitters for generated enumerations.

Each emitter turns an EnumRegistry (or a single Enumeration) into source
text declaring the same enumeration type, constants and tables for another
consumer.
"""

from .common import collect, write_output
from .c_header import generate_c_header
from .python_module import generate_python_module

GENERATORS = {
    "c": generate_c_header,
    "python": generate_python_module,
}

__all__ = [
    "collect",
    "write_output",
    "generate_c_header",
    "generate_python_module",
    "GENERATORS",
]
