"""Error types raised by the class system."""

from typing import Optional


class ClassError(Exception):
    """Base class for all class system errors."""

    def __init__(self, message: str = "", name: str = "ClassError"):
        super().__init__(f"{name}: {message}" if message else name)
        # After the base init: AttributeError.__init__ resets ``name``.
        self.message = message
        self.name = name


class MemberNotFoundError(ClassError, AttributeError):
    """A name could not be resolved anywhere in the delegation chain."""

    def __init__(self, member: str, class_name: Optional[str] = None):
        self.member = member
        self.class_name = class_name
        if class_name is not None:
            message = f"'{member}' is not defined on {class_name}"
        else:
            message = f"'{member}' is not defined"
        super().__init__(message, "MemberNotFoundError")


class InvalidClassError(ClassError, TypeError):
    """A value that is not a class was used where a class is required."""

    def __init__(self, message: str = ""):
        super().__init__(message, "InvalidClassError")


class ClassDefinitionError(ClassError):
    """A class could not be defined as requested."""

    def __init__(self, message: str = "", name: str = "ClassDefinitionError"):
        super().__init__(message, name)


class ClassRedefinitionError(ClassDefinitionError):
    """Raised when binding a class would replace an existing name."""

    def __init__(self, class_name: str):
        self.class_name = class_name
        super().__init__(
            f"'{class_name}' is already bound in this namespace",
            "ClassRedefinitionError",
        )
