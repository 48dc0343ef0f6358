"""
protoclass - Single-inheritance classes built on prototype delegation

Classes are mutable records that instances delegate to; unresolved lookups
walk from the instance to its class and up the parent chain. Constructors
chain manually through ``self.super(...)``.
"""

__version__ = "0.1.0"

from .errors import (
    ClassDefinitionError,
    ClassError,
    ClassRedefinitionError,
    InvalidClassError,
    MemberNotFoundError,
)
from .klass import (
    ANONYMOUS,
    CLASS_INIT,
    INIT,
    Class,
    Instance,
    cast,
    class_of,
    define_class,
    instantiate,
    is_a,
)
from .named import classdef, klass
from .proto import MISSING

__all__ = [
    "ANONYMOUS",
    "CLASS_INIT",
    "INIT",
    "MISSING",
    "Class",
    "ClassDefinitionError",
    "ClassError",
    "ClassRedefinitionError",
    "Instance",
    "InvalidClassError",
    "MemberNotFoundError",
    "cast",
    "class_of",
    "classdef",
    "define_class",
    "instantiate",
    "is_a",
    "klass",
]
