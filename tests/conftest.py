"""Pytest configuration for protoclass tests."""

import pytest

from protoclass import define_class


@pytest.fixture
def animal():
    """Root class whose constructor sets ``name``."""

    def init(self, name):
        self.name = name

    def describe(self):
        return f"{self.name} the animal"

    return define_class("Animal", members={"init": init, "describe": describe})


@pytest.fixture
def dog(animal):
    """Subclass of Animal with no constructor of its own."""
    return define_class("Dog", animal, {"speak": lambda self: "bark"})


@pytest.fixture
def puppy(dog):
    """Third level of the Animal hierarchy."""
    return define_class("Puppy", dog, {"speak": lambda self: "yip"})
