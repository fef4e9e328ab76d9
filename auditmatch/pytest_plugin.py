"""
pytest plugin — registered through the `pytest11` entry point.

Fixtures:
  audit_config   a default AuditConfig, active for the duration of the test
  be_audited     matcher factory bound to `audit_config`

    def test_user_is_audited(be_audited):
        assert_that(User(), be_audited().except_("password"))
"""
import pytest

from auditmatch.config import AuditConfig, set_config
from auditmatch.judgement.matcher import AuditMatcher


@pytest.fixture
def audit_config():
    config = AuditConfig()
    previous = set_config(config)
    yield config
    set_config(previous)


@pytest.fixture
def be_audited(audit_config):
    def factory() -> AuditMatcher:
        return AuditMatcher(config=audit_config)
    return factory
