#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from tostring import formatters


# Local Classes --------------------------------------------------------------------------------------------------------

class Gender(StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class Person:
    """Fields are assigned gender, name, age: this is their declaration order."""

    def __init__(self, name: str, gender: Gender, age: int) -> None:
        self.gender = gender
        self.name = name
        self.age = age

    def get_name(self) -> str:
        return self.name

    def get_gender(self) -> Gender:
        return self.gender

    def get_age(self) -> int:
        return self.age

    def __str__(self) -> str:
        return f"[{self.name}, {self.gender}, {self.age}]"


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def restore_options():
    """Reset module-level rendering options after each test."""
    saved = formatters.get_options()
    yield
    formatters._options = saved


@pytest.fixture
def person() -> Person:
    return Person("Daniel", Gender.MALE, 18)
