# tests/test_chain.py
"""
Tests for wrapping, chain traversal and chain rendering.
"""

import errno

import pytest

from rterror import (
    RTError,
    Traceable,
    find_in_chain,
    is_in_chain,
    is_temporary,
    iter_chain,
    render_chain,
    unwrap,
)
from tests.conftest import Sentinel


def leaf(message):
    return RTError(message).set_format("{.message}")


class TestWrap:

    def test_unwrap_returns_wrapped(self):
        err = RTError("error")
        assert RTError("Error message", 5, 3).wrap(err).unwrap() is err

    def test_unwrap_nothing(self):
        assert RTError("Error message").unwrap() is None

    def test_wrap_returns_self(self):
        err = RTError("A")
        assert err.wrap(RTError("B")) is err

    def test_last_wrap_wins(self):
        first, second = RTError("first"), RTError("second")
        assert RTError("A").wrap(first).wrap(second).unwrap() is second

    def test_wrap_none_clears(self):
        err = RTError("A").wrap(RTError("B")).wrap(None)
        assert err.unwrap() is None
        assert err.__cause__ is None

    def test_wrap_sets_python_cause(self):
        cause = ValueError("bad")
        assert RTError("A").wrap(cause).__cause__ is cause

    def test_wrap_rejects_non_exceptions(self):
        with pytest.raises(TypeError):
            RTError("A").wrap("not an error")

    def test_unwrap_scans_arguments_left_to_right(self):
        first, second = Sentinel("first"), Sentinel("second")
        assert RTError("A", 1, first, "x", second).unwrap() is first

    def test_explicit_wrap_takes_precedence(self):
        wrapped, argument = Sentinel("wrapped"), Sentinel("argument")
        assert RTError("A", argument).wrap(wrapped).unwrap() is wrapped

    def test_raise_from_is_followed(self):
        cause = OSError(errno.EAGAIN, "Resource temporarily unavailable")
        with pytest.raises(RTError) as info:
            raise RTError("top").set_format("{.message}") from cause
        err = info.value
        assert err.unwrap() is cause
        assert is_in_chain(err, cause)
        assert is_temporary(err)
        assert str(err) == "top\n`--" + str(cause)

    def test_wrap_and_arguments_take_precedence_over_raise_from(self):
        argument, raised = Sentinel("argument"), Sentinel("raised")
        with pytest.raises(RTError) as info:
            raise RTError("A", argument) from raised
        assert info.value.unwrap() is argument

    def test_is_traceable(self):
        assert isinstance(RTError("A"), Traceable)


class TestTraversal:

    def test_module_unwrap(self):
        cause = Sentinel("cause")
        plain = ValueError("plain")
        plain.__cause__ = cause
        assert unwrap(RTError("A").wrap(cause)) is cause
        assert unwrap(plain) is cause
        assert unwrap(ValueError("alone")) is None
        assert unwrap(None) is None
        assert unwrap("text") is None

    def test_iter_chain_order(self):
        c = RTError("C")
        b = RTError("B").wrap(c)
        a = RTError("A").wrap(b)
        assert list(iter_chain(a)) == [a, b, c]

    def test_iter_chain_none(self):
        assert list(iter_chain(None)) == []

    def test_iter_chain_follows_python_causes(self):
        root = OSError(errno.ENOENT, "missing")
        middle = ValueError("middle")
        middle.__cause__ = root
        top = RTError("top").wrap(middle)
        assert list(iter_chain(top)) == [top, middle, root]

    def test_cycle_terminates(self):
        a, b = RTError("A"), RTError("B")
        a.wrap(b)
        b.wrap(a)
        assert list(iter_chain(a)) == [a, b]

    def test_is_in_chain_remote_and_immediate(self):
        c = RTError("C")
        b = RTError("B").wrap(c)
        a = RTError("A").wrap(b)
        assert is_in_chain(a, c)
        assert is_in_chain(a, b)
        assert is_in_chain(a, a)
        assert a.is_in_chain(c)

    def test_is_in_chain_is_identity(self):
        a = RTError("A").wrap(RTError("C"))
        assert not is_in_chain(a, RTError("C"))
        assert not is_in_chain(None, a)

    def test_is_in_chain_through_arguments(self):
        sentinel = Sentinel("sentinel")
        assert is_in_chain(RTError("A", sentinel), sentinel)

    def test_find_in_chain(self):
        root = FileNotFoundError(errno.ENOENT, "missing")
        top = RTError("top").wrap(RTError("middle").wrap(root))
        assert find_in_chain(top, OSError) is root
        assert find_in_chain(top, (KeyError, FileNotFoundError)) is root
        assert find_in_chain(top, KeyError) is None


class TestRender:

    def test_single_error_has_no_extra_lines(self):
        assert str(leaf("alone")) == "alone"

    def test_wrapped_error(self):
        wrapped = leaf("wrapped error")
        err = RTError("Error message", 5).set_format("{.message}").wrap(wrapped)
        assert err.is_in_chain(wrapped)
        assert str(err) == "Error message 5\n`--wrapped error"

    def test_three_levels_indent_in_lock_step(self):
        d = leaf("D")
        c = leaf("C").wrap(d)
        b = leaf("B").wrap(c)
        a = leaf("A").wrap(b)
        lines = str(a).split("\n")
        assert lines == ["A", "`--B", "   `--C", "      `--D"]

    def test_links_use_their_own_format(self):
        inner = RTError("inner").set_format("<{.message}>")
        outer = leaf("outer").wrap(inner)
        assert str(outer) == "outer\n`--<inner>"

    def test_foreign_exceptions_render_their_message(self):
        root = OSError(errno.EAGAIN, "Resource temporarily unavailable")
        err = leaf("A").wrap(leaf("B").wrap(root))
        assert str(err) == "A\n`--B\n   `--" + str(root)
        assert str(root).endswith("Resource temporarily unavailable")

    def test_empty_foreign_message_uses_class_name(self):
        assert str(leaf("A").wrap(KeyboardInterrupt())) == "A\n`--KeyboardInterrupt"

    def test_custom_indent(self):
        err = leaf("A").wrap(leaf("B").wrap(leaf("C")))
        assert render_chain(err, indent="└─") == "A\n└─B\n  └─C"

    def test_indent_setting(self, restore_settings):
        restore_settings.indent = "+ "
        err = leaf("A").wrap(leaf("B").wrap(leaf("C")))
        assert str(err) == "A\n+ B\n  + C"

    def test_render_chain_of_plain_exception(self):
        top = ValueError("top")
        top.__cause__ = KeyError("k")
        assert render_chain(top, indent="`--") == "top\n`--'k'"

    def test_argument_error_is_rendered_as_cause(self):
        err = RTError("failed", Sentinel("boom")).set_format("{.message}")
        assert str(err) == "failed boom\n`--boom"
