"""Tests for error types, member handlers and subclass hooks."""

import logging

import pytest

from protoclass import (
    ClassDefinitionError,
    ClassError,
    ClassRedefinitionError,
    InvalidClassError,
    MemberNotFoundError,
    define_class,
)


class TestErrorTypes:
    """Test the exception hierarchy and messages."""

    def test_member_not_found_message(self):
        err = MemberNotFoundError("fly", "Dog")
        assert str(err) == "MemberNotFoundError: 'fly' is not defined on Dog"
        assert err.member == "fly"
        assert err.class_name == "Dog"

    def test_member_not_found_without_class(self):
        assert str(MemberNotFoundError("fly")) == "MemberNotFoundError: 'fly' is not defined"

    def test_native_bases(self):
        """Errors can be caught as the matching builtin exception."""
        assert issubclass(MemberNotFoundError, AttributeError)
        assert issubclass(InvalidClassError, TypeError)
        assert issubclass(ClassRedefinitionError, ClassDefinitionError)

    @pytest.mark.parametrize(
        "error",
        [
            MemberNotFoundError("x"),
            InvalidClassError("bad"),
            ClassDefinitionError("bad"),
            ClassRedefinitionError("X"),
        ],
    )
    def test_common_base(self, error):
        assert isinstance(error, ClassError)

    def test_base_without_message(self):
        err = ClassError()
        assert str(err) == "ClassError"
        assert err.message == ""

    def test_anonymous_class_in_message(self):
        """Errors from anonymous classes name the anonymous marker."""
        with pytest.raises(MemberNotFoundError, match="<anonymous>"):
            define_class()().missing


class TestCatch:
    """Test member handlers installed with Class.catch."""

    def test_handler_called_for_missing(self, animal):
        animal.catch(lambda self, name: f"no {name}")
        assert animal("Rex").wings == "no wings"

    def test_handler_not_used_for_found(self, animal):
        animal.catch(lambda self, name: "fallback")
        assert animal("Rex").name == "Rex"

    def test_handler_inherited(self, animal, dog):
        animal.catch(lambda self, name: name.upper())
        assert dog("Fido").tail == "TAIL"

    def test_subclass_handler_wins(self, animal, dog):
        animal.catch(lambda self, name: "animal")
        dog.catch(lambda self, name: "dog")
        assert dog("Fido").tail == "dog"
        assert animal("Rex").tail == "animal"

    def test_handler_may_raise(self, animal):
        def strict(self, name):
            raise MemberNotFoundError(name, "Strict")

        animal.catch(strict)
        with pytest.raises(MemberNotFoundError, match="Strict"):
            animal("Rex").wings

    def test_handler_must_be_callable(self, animal):
        with pytest.raises(ClassDefinitionError):
            animal.catch("not callable")


class TestClassInit:
    """Test the class_init hook run when a subclass is defined."""

    def test_called_with_subclass(self):
        seen = []
        base = define_class("Base", members={"class_init": lambda cls: seen.append(cls)})
        child = define_class("Child", base)
        assert seen == [child]

    def test_inherited_hook(self):
        seen = []
        base = define_class("Base", members={"class_init": lambda cls: seen.append(cls._name)})
        child = define_class("Child", base)
        define_class("Grandchild", child)
        assert seen == ["Child", "Grandchild"]

    def test_hook_can_add_members(self):
        def register(cls):
            cls.registered = True

        base = define_class("Base", members={"class_init": register})
        child = define_class("Child", base)
        assert child._members["registered"] is True

    def test_not_called_for_root(self):
        seen = []
        define_class("Base", members={"class_init": lambda cls: seen.append(cls)})
        assert seen == []


class TestLogging:
    """Test debug records emitted while defining classes."""

    def test_definition_logged(self, caplog, animal):
        with caplog.at_level(logging.DEBUG, logger="protoclass.klass"):
            define_class("Dog", animal)
        assert "Defined class Dog (parent: Animal)" in caplog.text

    def test_cast_logged(self, caplog, animal, dog):
        rex = animal("Rex")
        with caplog.at_level(logging.DEBUG, logger="protoclass.klass"):
            dog.cast(rex)
        assert "from Animal to Dog" in caplog.text
