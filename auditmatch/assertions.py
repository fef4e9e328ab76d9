"""
Assertion helpers for plain `assert`-style test suites.

    assert_that(widget, be_audited().except_("secret"))
    assert_not(draft, be_audited())

Both raise AssertionError carrying the matcher's failure message.
"""


def assert_that(subject, matcher) -> None:
    if not matcher.matches(subject):
        raise AssertionError(matcher.failure_message())


def assert_not(subject, matcher) -> None:
    if matcher.matches(subject):
        raise AssertionError(matcher.negative_failure_message())
