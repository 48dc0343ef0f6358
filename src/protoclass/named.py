"""Named class definitions.

Two spellings bind a class under its own name:

    klass.Dog(Animal)          # binds Dog in the calling module

    @classdef(Animal)
    class Dog:
        def speak(self):
            return "bark"
"""

import sys
from typing import Any, Callable, Mapping, MutableMapping, Optional, Union

from .errors import ClassDefinitionError
from .klass import INIT, Class, define_class

# Attributes every Python class body carries that are not members.
_BODY_SKIP = frozenset(
    {
        "__module__",
        "__qualname__",
        "__dict__",
        "__weakref__",
        "__firstlineno__",
        "__static_attributes__",
        "__doc__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
    }
)


class _NamedClassFactory:
    """Attribute access yields a definer that binds into the caller's globals."""

    def __getattr__(self, name: str) -> Callable[..., Class]:
        if name.startswith("__"):
            raise AttributeError(name)

        def definer(
            parent: Optional[Class] = None,
            members: Optional[Mapping[str, Any]] = None,
            *,
            overwrite: bool = True,
        ) -> Class:
            namespace = sys._getframe(1).f_globals
            return define_class(
                name, parent, members, namespace=namespace, overwrite=overwrite
            )

        definer.__name__ = name
        definer.__qualname__ = f"klass.{name}"
        return definer

    def __repr__(self) -> str:
        return "klass"


klass = _NamedClassFactory()


def _members_from_body(body: type) -> dict:
    if body.__bases__ != (object,):
        raise ClassDefinitionError(
            f"{body.__name__}: pass the parent to classdef() instead of using Python bases"
        )
    if "__init__" in vars(body):
        raise ClassDefinitionError(
            f"{body.__name__}: the constructor must be named '{INIT}', not '__init__'"
        )
    members = {}
    for key, value in vars(body).items():
        if key in _BODY_SKIP:
            continue
        members[key] = value
    return members


def classdef(
    parent: Union[Class, type, None] = None,
    *,
    namespace: Optional[MutableMapping[str, Any]] = None,
    overwrite: bool = True,
) -> Any:
    """Build a Class from a Python class body.

    The body's functions and attributes become members and its name becomes
    the class name. Works bare (``@classdef``) or with a parent
    (``@classdef(Animal)``).
    """
    if isinstance(parent, type):
        return classdef()(parent)

    def decorate(body: type) -> Class:
        if not isinstance(body, type):
            raise ClassDefinitionError(f"classdef expects a class body, not {body!r}")
        cls = define_class(
            body.__name__,
            parent,
            _members_from_body(body),
            namespace=namespace,
            overwrite=overwrite,
        )
        # Kept off the member table so instances do not inherit it.
        object.__setattr__(cls, "__doc__", body.__doc__)
        return cls

    return decorate
