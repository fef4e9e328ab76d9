"""
Judgement engine tests.
"""
from z3 import BoolVal

from auditmatch.judgement.engine import check, column_constraints, judge, named


class TestNamed:
    def test_label_attached(self):
        expr = named("audited/enabled", BoolVal(True))
        assert expr._repr == "audited/enabled"

    def test_check_label(self):
        assert check("x/y", 1)._repr == "x/y"


class TestJudge:
    def test_empty_is_satisfied(self):
        r = judge([])
        assert r["satisfied"] is True
        assert r["violations"] == []

    def test_all_pass(self):
        r = judge([check("a", True), check("b", True)])
        assert r["satisfied"] is True
        assert [c["label"] for c in r["constraints"]] == ["a", "b"]

    def test_partial(self):
        r = judge([check("a", True), check("b", False)])
        assert r["satisfied"] is False
        assert r["violations"] == ["b"]

    def test_unnamed_label(self):
        r = judge([BoolVal(False)])
        assert r["violations"] == ["constraint[0]"]


class TestColumnConstraints:
    def test_equal_sets(self):
        r = judge(column_constraints({"c", "d"}, ["d", "c"]))
        assert r["satisfied"] is True
        assert [c["label"] for c in r["constraints"]] == ["columns/c", "columns/d"]

    def test_reports_each_disagreeing_column(self):
        r = judge(column_constraints({"secret", "notes"}, {"id", "secret"}))
        assert r["violations"] == ["columns/id", "columns/notes"]

    def test_both_empty(self):
        assert column_constraints(set(), set()) == []
