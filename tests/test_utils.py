#
# Tostring - Utils Tests
#

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from tostring.utils import anonymous, class_name, is_anonymous, type_name


# Local Classes --------------------------------------------------------------------------------------------------------

class Object:
    pass


class Child(Object):
    pass


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassName:
    @pytest.mark.parametrize(
        "obj, fully_qualified_builtins, expected",
        [
            pytest.param(int, False, "int", id="builtin-class-no-fq"),
            pytest.param(10, False, "int", id="builtin-instance-no-fq"),
            pytest.param(int, True, "builtins.int", id="builtin-class-fq"),
            pytest.param("abc", True, "builtins.str", id="builtin-str-fq"),
            pytest.param(None, False, "NoneType", id="none-no-fq"),
        ],
    )
    def test_builtin_names(self, obj, fully_qualified_builtins, expected):
        """Return correct builtin class names with and without full qualification."""
        assert class_name(obj, fully_qualified_builtins=fully_qualified_builtins) == expected

    def test_user_class_fq(self):
        """Return module-qualified user class name on request."""
        assert class_name(Child(), fully_qualified=True) == f"{Child.__module__}.Child"
        assert class_name(Child) == "Child"


class TestTypeName:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(str, "str", id="builtin-class"),
            pytest.param("text", "str", id="builtin-instance"),
            pytest.param(Child, "Child", id="user-class"),
            pytest.param(Child(), "Child", id="user-instance"),
        ],
    )
    def test_named(self, obj, expected):
        """Named classes render as their simple name."""
        assert type_name(obj) == expected

    def test_anonymous_subclass(self):
        """Anonymous subclass renders through its base."""
        assert type_name(anonymous(Object)) == "Object$Anonymous"
        assert type_name(anonymous()) == "object$Anonymous"

    def test_anonymous_instance(self):
        """Instances of anonymous classes render through the base too."""
        assert type_name(anonymous(Object)()) == "Object$Anonymous"

    def test_custom_suffix(self):
        assert type_name(anonymous(Child), suffix="<anon>") == "Child<anon>"

    def test_one_level_only(self):
        """Anonymous base is not searched further."""
        inner = anonymous(Object)
        outer = anonymous(inner)
        assert type_name(outer) == "$Anonymous"


class TestAnonymous:
    def test_namespace(self):
        """Namespace members become class attributes."""
        cls = anonymous(Object, greeting="hi")
        assert cls.greeting == "hi"
        assert issubclass(cls, Object)
        assert is_anonymous(cls)
        assert not is_anonymous(Object)

    def test_base_must_be_class(self):
        with pytest.raises(TypeError, match="base must be a class"):
            anonymous(Object())
