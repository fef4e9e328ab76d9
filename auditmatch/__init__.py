"""
auditmatch — assertions for audited data models

Check that a model class has been configured for change-auditing the way a
test expects: audited at all, which columns are tracked, whether an audit
comment is required.

Quick start
-----------
  from auditmatch import Auditable, audited, be_audited, assert_that

  @audited(except_=["password"])
  class User(Auditable):
      columns = ["id", "name", "password"]

  assert_that(User(), be_audited().except_("password"))

Layers
------
  Builder     be_audited().only(...).except_(...).requires_comment()
  Evaluator   matcher.matches(subject) → bool, failure_message()
  Judgement   each check decided as a named Z3 constraint
"""

from auditmatch.assertions import assert_not, assert_that
from auditmatch.config import AuditConfig, get_config, load_config, set_config
from auditmatch.judgement.auditable import (
    Auditable, audited, disable_auditing, enable_auditing,
)
from auditmatch.judgement.matcher import AuditMatcher, be_audited

__all__ = [
    "Auditable", "audited", "disable_auditing", "enable_auditing",
    "AuditMatcher", "be_audited",
    "assert_that", "assert_not",
    "AuditConfig", "get_config", "load_config", "set_config",
]
__version__ = "0.1.0"
