import pytest

from mapo.foundation.registry import Registry


def test_register_and_get_case_insensitive():
    reg: Registry[int] = Registry("numbers")
    reg.register("One", 1)
    assert reg.get("one") == 1
    assert "ONE" in reg
    assert reg["one"] == 1
    assert len(reg) == 1


def test_register_as_decorator():
    reg: Registry = Registry("builders")

    @reg.register("double")
    def _double(x):
        return 2 * x

    assert reg.get("double")(3) == 6
    assert list(reg) == ["double"]


def test_duplicate_requires_override():
    reg: Registry[int] = Registry()
    reg.register("a", 1)
    with pytest.raises(ValueError):
        reg.register("a", 2)
    reg.register("a", 2, override=True)
    assert reg.get("a") == 2


def test_missing_key_and_default():
    reg: Registry[int] = Registry("things")
    with pytest.raises(KeyError):
        reg.get("nope")
    assert reg.get("nope", None) is None


def test_suggest_close_names():
    reg: Registry[int] = Registry()
    reg.register("nsgaii", 1)
    reg.register("ann_nsgaii", 2)
    assert reg.suggest("nsgai")[0] == "nsgaii"
    assert reg.suggest("") == []
    assert reg.list() == ["ann_nsgaii", "nsgaii"]
