"""Tests for core/context.py: execution context factory."""

from phasehook.core.context import create_execution_context
from phasehook.core.namespace import Namespace


class TestCreateExecutionContext:
    def test_creates_with_pattern_and_args(self):
        ns = Namespace("sys")
        ctx = create_execution_context(ns, "sys.login.call", ["admin", "1234"])
        assert ctx.pattern == "sys.login.call"
        assert ctx.args == ("admin", "1234")
        assert ctx.return_value is None
        assert ctx.stopped is False

    def test_creates_with_no_args(self):
        ctx = create_execution_context(Namespace("sys"), "sys.ping.call")
        assert ctx.args == ()

    def test_shared_context_is_shallow_copy(self):
        sessions = {}
        ns = Namespace("sys", shared_context={"sessions": sessions, "count": 0})
        ctx = create_execution_context(ns, "sys.login.call")

        ctx.shared["count"] = 5
        ctx["sessions"]["admin"] = "token"

        assert ns.shared_context["count"] == 0
        assert ns.shared_context["sessions"] == {"admin": "token"}

    def test_independent_instances(self):
        ns = Namespace("sys", shared_context={"x": 1})
        ctx1 = create_execution_context(ns, "sys.a.call")
        ctx2 = create_execution_context(ns, "sys.a.call")
        ctx1.shared["x"] = 2
        ctx1.return_value = "val"
        assert ctx2.shared == {"x": 1}
        assert ctx2.return_value is None
