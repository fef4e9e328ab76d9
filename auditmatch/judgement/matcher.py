"""
be_audited — assert that a model is configured for auditing.

Options:
  only(*fields)        the audit covers exactly these fields (overrides except_)
  except_(*fields)     the audit skips these fields on top of the ignored ones
  requires_comment()   the model must be invalid without an audit_comment
  on(*actions)         the audit is scoped to these actions (recorded only)

Example
-------
    assert_that(user, be_audited())
    assert_that(user, be_audited().only("name"))
    assert_that(user, be_audited().except_("password"))
    assert_that(user, be_audited().requires_comment())
"""
from __future__ import annotations

from auditmatch.config import get_config

from .auditable import Auditable, flatten
from .engine import check, column_constraints, judge


def be_audited(config=None) -> "AuditMatcher":
    return AuditMatcher(config=config)


class AuditMatcher:

    def __init__(self, config=None):
        self.options: dict = {}
        self.config  = config
        self.results: list = []
        self.violations: list = []
        self._subject     = None
        self._config      = None
        self._expectation = None

    # ── Builder ───────────────────────────────────────────────────────────────

    def only(self, *fields) -> "AuditMatcher":
        self.options["only"] = flatten(fields)
        return self

    def except_(self, *fields) -> "AuditMatcher":
        self.options["except"] = flatten(fields)
        return self

    def requires_comment(self) -> "AuditMatcher":
        self.options["comment_required"] = True
        return self

    def on(self, *actions) -> "AuditMatcher":
        self.options["on"] = flatten(actions)
        return self

    # ── Evaluation ────────────────────────────────────────────────────────────

    def matches(self, subject) -> bool:
        """Run the checks in order; the first failure decides the verdict."""
        self._subject = subject
        self._config  = self.config or get_config()
        self.results  = []
        self.violations = []
        return (
            self._auditing_enabled()
            and self._records_changes_to_specified_fields()
            and self._comment_required_valid()
        )

    @property
    def model_class(self):
        return type(self._subject)

    def _expects(self, message: str) -> None:
        self._expectation = message

    def _judge(self, constraints: list) -> bool:
        result = judge(constraints)
        self.results.extend(result["constraints"])
        self.violations.extend(result["violations"])
        for c in result["constraints"]:
            self._config.trace(f"{c['label']}: {'pass' if c['passed'] else 'FAIL'}")
        return result["satisfied"]

    def _auditing_enabled(self) -> bool:
        cls = self.model_class
        self._expects(f"{cls.__name__} to be audited")
        enabled = issubclass(cls, Auditable) and bool(cls.auditing_enabled())
        return self._judge([check("audited/enabled", enabled)])

    def _records_changes_to_specified_fields(self) -> bool:
        if "only" not in self.options and "except" not in self.options:
            return True

        cls = self.model_class
        if "only" in self.options:
            only = {str(f) for f in self.options["only"]}
            expected = {c for c in cls.column_names() if c not in only}
        else:
            expected = set(cls.default_ignored_attributes())
            expected |= set(self._config.ignored_attributes)
            expected |= {str(f) for f in self.options["except"]}

        actual = {str(c) for c in cls.non_audited_columns()}
        self._expects(
            f"non audited columns ({sorted(actual)}) to match ({sorted(expected)})"
        )
        return self._judge(column_constraints(actual, expected))

    def _comment_required_valid(self) -> bool:
        if not self.options.get("comment_required"):
            return True

        self._subject.audit_comment = None
        self._expects("to be invalid when audit comment is not specified")
        invalid = self._subject.is_valid() is False
        keyed   = invalid and "audit_comment" in self._subject.errors
        return self._judge([check("audited/comment-required", keyed)])

    # ── Messages ──────────────────────────────────────────────────────────────

    def failure_message(self) -> str:
        return f"Expected {self._expectation}"

    def negative_failure_message(self) -> str:
        return f"Did not expect {self._expectation}"

    def description(self) -> str:
        description = "audited"
        if "only" in self.options:
            description += f" only => {', '.join(str(f) for f in self.options['only'])}"
        if "except" in self.options:
            description += f" except => {', '.join(str(f) for f in self.options['except'])}"
        if "comment_required" in self.options:
            description += " requires audit_comment"
        return description

    def __repr__(self):
        return f"AuditMatcher({self.options!r})"
