"""Single-inheritance classes built on prototype delegation.

A ``Class`` is a ProtoTable whose prototype is its parent class, and an
``Instance`` is a ProtoTable whose prototype is its class. Looking a name up on
an instance therefore checks the instance's own storage, then its class, then
each ancestor in turn, and stops at the root class.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional

from .errors import (
    ClassDefinitionError,
    ClassRedefinitionError,
    InvalidClassError,
    MemberNotFoundError,
)
from .proto import MISSING, ProtoTable

logger = logging.getLogger(__name__)

INIT = "init"
CLASS_INIT = "class_init"
SUPER = "super"
ANONYMOUS = "<anonymous>"

# Names answered by the Python-level API; members with these names would be shadowed.
CLASS_RESERVED = frozenset({"is_a", "class_of", "cast", "catch", "method"})
INSTANCE_RESERVED = frozenset({"is_a"})

_INTERNAL_ATTRS = frozenset({"_fields", "_prototype", "_name", "_handler"})
_INSTANCE_INTERNAL = frozenset({"_fields", "_prototype", "_super"})
_READ_ONLY = frozenset({"_base", "_members", "_class"})


def _is_dunder(key: str) -> bool:
    return key.startswith("__") and key.endswith("__")


def _bind(value: Any, instance: Optional["Instance"], owner: "Class") -> Any:
    """Apply the descriptor protocol to a member found on a class.

    Functions become bound methods, ``staticmethod``/``classmethod`` unwrap or
    bind to ``owner``, and properties are evaluated. Read through a class
    (``instance`` is None) functions and properties come back as themselves.
    """
    if hasattr(type(value), "__get__"):
        return value.__get__(instance, owner)
    return value


class Class(ProtoTable):
    """A named template whose members are shared by its instances."""

    def __init__(
        self,
        name: Optional[str] = None,
        parent: Optional["Class"] = None,
        members: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(parent)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_handler", None)
        for key, value in (members or {}).items():
            self._define(key, value)

    @property
    def _base(self) -> Optional["Class"]:
        return self._prototype

    @property
    def _members(self) -> Dict[str, Any]:
        """Copy of the members defined on this class itself."""
        return dict(self._fields)

    def _display_name(self) -> str:
        return self._name if self._name is not None else ANONYMOUS

    def _define(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise ClassDefinitionError(f"member names must be strings, not {key!r}")
        if key in CLASS_RESERVED:
            raise ClassDefinitionError(
                f"'{key}' is reserved and cannot be defined on {self._display_name()}"
            )
        self._rawset(key, value)

    def _find_handler(self) -> Optional[Callable[["Instance", str], Any]]:
        for record in self._chain():
            if record._handler is not None:
                return record._handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> "Instance":
        return instantiate(self, *args, **kwargs)

    def __getattr__(self, key: str) -> Any:
        if key in _INTERNAL_ATTRS or _is_dunder(key):
            raise AttributeError(key)
        value, _ = self._resolve(key)
        if value is MISSING:
            raise MemberNotFoundError(key, self._display_name())
        return _bind(value, None, self)

    def __setattr__(self, key: str, value: Any) -> None:
        if key in _INTERNAL_ATTRS:
            object.__setattr__(self, key, value)
        elif key in _READ_ONLY:
            raise ClassDefinitionError(f"'{key}' is read-only on {self._display_name()}")
        else:
            self._define(key, value)

    def __delattr__(self, key: str) -> None:
        if not self._rawdelete(key):
            raise MemberNotFoundError(key, self._display_name())

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._keys()))

    def __repr__(self) -> str:
        return f"<class {self._display_name()}>"

    def is_a(self, cls: "Class") -> bool:
        return is_a(self, cls)

    def class_of(self, value: Any) -> bool:
        """True if ``value`` is an instance of this class or of a subclass."""
        return class_of(self, value)

    def cast(self, instance: "Instance") -> "Instance":
        return cast(self, instance)

    def catch(self, handler: Callable[["Instance", str], Any]) -> None:
        """Install a fallback for names missing from the whole chain.

        ``handler(instance, name)`` is called instead of raising
        MemberNotFoundError. Subclasses inherit the handler unless they
        install their own.
        """
        if not callable(handler):
            raise ClassDefinitionError(f"handler {handler!r} is not callable")
        object.__setattr__(self, "_handler", handler)

    def method(self, fn: Optional[Callable] = None, *, name: Optional[str] = None):
        """Add a member after definition.

        Usable as ``@cls.method`` or ``@cls.method(name="other")``; the
        function is returned unchanged.
        """

        def register(func: Callable) -> Callable:
            self._define(name or func.__name__, func)
            return func

        if fn is None:
            return register
        return register(fn)


def _binary_hook(hook: str) -> Callable:
    def operator(self: "Instance", other: Any) -> Any:
        fn = self._hook(hook)
        if fn is MISSING:
            return NotImplemented
        return fn(self, other)

    operator.__name__ = hook
    return operator


class Instance(ProtoTable):
    """An object whose unresolved lookups delegate to its class chain."""

    def __init__(self, cls: Class):
        super().__init__(cls)
        # Constructor chaining helper, kept out of the instance's fields.
        object.__setattr__(self, "_super", None)

    @property
    def _class(self) -> Class:
        return self._prototype

    def _hook(self, hook: str) -> Any:
        """Operator hooks come from the class chain, never from own storage."""
        return self._class._resolve(hook)[0]

    def _default_display(self) -> str:
        return f"{self._class._display_name()}: {hex(id(self))}"

    def is_a(self, cls: Class) -> bool:
        return is_a(self, cls)

    def __getattr__(self, key: str) -> Any:
        if key in _INSTANCE_INTERNAL or _is_dunder(key):
            raise AttributeError(key)
        if key == SUPER and self._super is not None:
            return self._super
        value, owner = self._resolve(key)
        if value is MISSING:
            if key == "_name":
                return self._class._name
            handler = self._class._find_handler()
            if handler is not None:
                return handler(self, key)
            raise MemberNotFoundError(key, self._class._display_name())
        if owner is self:
            return value
        return _bind(value, self, self._class)

    def __setattr__(self, key: str, value: Any) -> None:
        if key in _INSTANCE_INTERNAL:
            object.__setattr__(self, key, value)
        elif key in _READ_ONLY:
            raise ClassDefinitionError(
                f"'{key}' is read-only on an instance of {self._class._display_name()}"
            )
        elif key in INSTANCE_RESERVED:
            raise ClassDefinitionError(f"'{key}' is reserved and cannot be set on an instance")
        else:
            self._rawset(key, value)

    def __delattr__(self, key: str) -> None:
        if not self._rawdelete(key):
            raise MemberNotFoundError(key, self._class._display_name())

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._keys()))

    def __str__(self) -> str:
        fn = self._hook("__str__")
        if fn is MISSING:
            return self._default_display()
        return fn(self)

    def __repr__(self) -> str:
        fn = self._hook("__repr__")
        if fn is MISSING:
            return self._default_display()
        return fn(self)

    def __hash__(self) -> int:
        fn = self._hook("__hash__")
        if fn is MISSING:
            return object.__hash__(self)
        return fn(self)

    def __len__(self) -> int:
        fn = self._hook("__len__")
        if fn is MISSING:
            raise TypeError(f"instance of {self._class._display_name()} has no len()")
        return fn(self)

    def __bool__(self) -> bool:
        fn = self._hook("__bool__")
        if fn is not MISSING:
            return bool(fn(self))
        fn = self._hook("__len__")
        if fn is not MISSING:
            return fn(self) != 0
        return True

    def __neg__(self) -> Any:
        fn = self._hook("__neg__")
        if fn is MISSING:
            raise TypeError(
                f"bad operand type for unary -: instance of {self._class._display_name()}"
            )
        return fn(self)

    __eq__ = _binary_hook("__eq__")
    __lt__ = _binary_hook("__lt__")
    __le__ = _binary_hook("__le__")
    __gt__ = _binary_hook("__gt__")
    __ge__ = _binary_hook("__ge__")
    __add__ = _binary_hook("__add__")
    __sub__ = _binary_hook("__sub__")
    __mul__ = _binary_hook("__mul__")
    __truediv__ = _binary_hook("__truediv__")
    __mod__ = _binary_hook("__mod__")


def _check_binding(namespace: MutableMapping[str, Any], name: str, overwrite: bool) -> None:
    if name in namespace and not overwrite:
        raise ClassRedefinitionError(name)


def define_class(
    name: Optional[str] = None,
    parent: Optional[Class] = None,
    members: Optional[Mapping[str, Any]] = None,
    *,
    namespace: Optional[MutableMapping[str, Any]] = None,
    overwrite: bool = True,
) -> Class:
    """Create a new class.

    Args:
        name: Display name; required when binding into a namespace.
        parent: Existing class that unresolved lookups are forwarded to.
        members: Initial members; ``init`` is the constructor.
        namespace: Mapping the class is also bound into under ``name``.
        overwrite: When False, refuse to replace an existing binding.

    Raises:
        InvalidClassError: ``parent`` is not a class.
        ClassDefinitionError: Bad name, reserved member name, or an
            anonymous class given a namespace.
        ClassRedefinitionError: ``name`` is already bound and ``overwrite``
            is False.
    """
    if name is not None and not isinstance(name, str):
        raise ClassDefinitionError(f"class name must be a string, not {type(name).__name__}")
    if parent is not None and not isinstance(parent, Class):
        raise InvalidClassError(f"parent {parent!r} is not a class")
    if namespace is not None:
        if name is None:
            raise ClassDefinitionError("an anonymous class cannot be bound into a namespace")
        _check_binding(namespace, name, overwrite)

    cls = Class(name, parent, members)
    if parent is not None:
        hook, _ = parent._resolve(CLASS_INIT)
        if hook is not MISSING:
            hook(cls)
    logger.debug(
        "Defined class %s (parent: %s)",
        cls._display_name(),
        parent._display_name() if parent is not None else None,
    )

    if namespace is not None:
        if name in namespace:
            logger.debug("Rebinding %r to a new class", name)
        namespace[name] = cls
    return cls


def _construct(cls: Class, instance: Instance, args: tuple, kwargs: dict) -> None:
    """Run the nearest ``init`` at or above ``cls``.

    While it runs, ``instance.super`` calls the next ``init`` above the one
    running. Nothing chains automatically.
    """
    owner = cls._owner_of(INIT)
    if owner is None:
        return
    init = owner._rawget(INIT)
    above = owner._base._owner_of(INIT) if owner._base is not None else None

    chain_up = None
    if above is not None:

        def chain_up(*super_args: Any, **super_kwargs: Any) -> None:
            _construct(above, instance, super_args, super_kwargs)

    previous = instance._super
    object.__setattr__(instance, "_super", chain_up)
    try:
        init(instance, *args, **kwargs)
    finally:
        object.__setattr__(instance, "_super", previous)


def instantiate(cls: Class, *args: Any, **kwargs: Any) -> Instance:
    """Create an instance of ``cls`` and run its constructor, if any."""
    if not isinstance(cls, Class):
        raise InvalidClassError(f"{cls!r} is not a class and cannot be instantiated")
    instance = Instance(cls)
    _construct(cls, instance, args, kwargs)
    return instance


def is_a(value: Any, cls: Class) -> bool:
    """True iff ``cls`` appears in the chain of ``value``.

    For an instance the chain starts at its class; for a class it starts at
    the class itself. Any other value answers False.
    """
    if not isinstance(cls, Class):
        raise InvalidClassError(f"{cls!r} is not a class")
    if isinstance(value, Instance):
        start = value._class
    elif isinstance(value, Class):
        start = value
    else:
        return False
    return any(record is cls for record in start._chain())


def class_of(cls: Any, value: Any) -> bool:
    """Like ``is_a`` with the arguments swapped, but never raises."""
    if not isinstance(cls, Class):
        return False
    return is_a(value, cls)


def cast(cls: Class, instance: Instance) -> Instance:
    """Re-link ``instance`` to ``cls`` without running a constructor."""
    if not isinstance(cls, Class):
        raise InvalidClassError(f"{cls!r} is not a class")
    if not isinstance(instance, Instance):
        raise InvalidClassError(f"{instance!r} is not an instance and cannot be cast")
    previous = instance._class
    object.__setattr__(instance, "_prototype", cls)
    logger.debug(
        "Cast instance %s from %s to %s",
        hex(id(instance)),
        previous._display_name(),
        cls._display_name(),
    )
    return instance
