"""
Auditable model tests: @audited options, column metadata, comment validation.
"""
import pytest

from auditmatch import (
    AuditConfig, Auditable, assert_that, audited, be_audited,
    disable_auditing, enable_auditing,
)
from auditmatch.judgement.auditable import flatten

NO_GLOBALS = AuditConfig(ignored_attributes=[])


def _user(**options):
    @audited(**options)
    class User(Auditable):
        columns      = ["id", "type", "name", "password", "updated_at"]
        audit_config = AuditConfig(ignored_attributes=["updated_at"])

        def validate(self):
            if not self.name:
                self.add_error("name", "can't be blank")
    return User


# ── flatten ───────────────────────────────────────────────────────────────────

class TestFlatten:
    def test_nested(self):
        assert flatten([1, [2, (3, [4])]]) == [1, 2, 3, 4]

    def test_strings_kept(self):
        assert flatten(["ab", ["cd"]]) == ["ab", "cd"]

    def test_empty(self):
        assert flatten([]) == []


# ── @audited ──────────────────────────────────────────────────────────────────

class TestAudited:
    def test_plain_class_not_audited(self):
        class Plain(Auditable):
            columns = ["id"]
        assert Plain.auditing_enabled() is False

    def test_bare_decorator(self):
        @audited
        class Note(Auditable):
            columns = ["id", "body"]
        assert Note.auditing_enabled() is True
        assert Note.audit_options == {"comment_required": False}

    def test_options_flattened(self):
        User = _user(only=[["name"], "password"], on=("create", ["update"]))
        assert User.audit_options["only"] == ["name", "password"]
        assert User.audit_options["on"] == ["create", "update"]

    def test_rejects_non_auditable(self):
        with pytest.raises(TypeError, match="Auditable subclass"):
            @audited
            class Loose:
                pass

    def test_disable_and_enable(self):
        User = _user()
        disable_auditing(User)
        assert User.auditing_enabled() is False
        enable_auditing(User)
        assert User.auditing_enabled() is True

    def test_unknown_column_rejected(self):
        User = _user()
        with pytest.raises(TypeError, match="no column 'email'"):
            User(email="a@b.c")


# ── Column metadata ───────────────────────────────────────────────────────────

class TestColumns:
    def test_default_ignored_primary_key(self):
        assert _user().default_ignored_attributes() == ["id"]

    def test_inheritance_column_ignored(self):
        User = _user()
        User.inheritance_column = "type"
        assert User.default_ignored_attributes() == ["id", "type"]

    def test_except(self):
        User = _user(except_=["password"])
        assert User.non_audited_columns() == ["id", "updated_at", "password"]

    def test_except_deduplicated(self):
        User = _user(except_=["id", "password"])
        assert User.non_audited_columns() == ["id", "updated_at", "password"]

    def test_only(self):
        User = _user(only=["name"])
        assert User.non_audited_columns() == ["id", "type", "password", "updated_at"]

    def test_uses_active_config_without_override(self, audit_config):
        @audited
        class Post(Auditable):
            columns = ["id", "title", "created_at"]
        audit_config.ignored_attributes = ["created_at"]
        assert Post.non_audited_columns() == ["id", "created_at"]


# ── Validation ────────────────────────────────────────────────────────────────

class TestValidation:
    def test_valid(self):
        assert _user()(name="ann").is_valid() is True

    def test_model_errors(self):
        user = _user()()
        assert user.is_valid() is False
        assert user.errors == {"name": ["can't be blank"]}

    def test_unset_columns_default_to_none(self):
        user = _user()(name="ann")
        assert user.id is None and user.password is None
        assert repr(user).startswith("User(id=None, type=None, name='ann'")

    def test_comment_check_on_bare_instance(self):
        @audited(except_=["password"], comment_required=True)
        class Account(Auditable):
            columns = ["id", "name", "password"]

            def validate(self):
                if not self.name:
                    self.add_error("name", "can't be blank")

        account = Account()
        matcher = be_audited(config=NO_GLOBALS).requires_comment()
        assert matcher.matches(account) is True
        assert account.errors == {
            "name": ["can't be blank"], "audit_comment": ["can't be blank"],
        }

    def test_comment_required(self):
        user = _user(comment_required=True)(name="ann")
        assert user.is_valid() is False
        assert "audit_comment" in user.errors
        user.audit_comment = "rename"
        assert user.is_valid() is True

    def test_comment_not_required_when_disabled(self):
        User = _user(comment_required=True)
        disable_auditing(User)
        assert User(name="ann").is_valid() is True


# ── End to end ────────────────────────────────────────────────────────────────

class TestEndToEnd:
    def test_full_configuration(self):
        User = _user(except_=["password"], comment_required=True)
        config = AuditConfig(ignored_attributes=["updated_at"])
        matcher = be_audited(config=config).except_("password").requires_comment()
        assert_that(User(name="ann", audit_comment="init"), matcher)

    def test_comment_check_fails_without_requirement(self):
        User = _user(except_=["password"])
        matcher = be_audited(config=NO_GLOBALS).requires_comment()
        assert matcher.matches(User(name="ann")) is False
