"""
Auditable base class.

A model class becomes inspectable by the audit matchers by extending
Auditable and declaring its columns.  The `audited` decorator switches
auditing on and records which columns it covers.

Example
-------
from auditmatch import Auditable, audited

@audited(except_=["password"], comment_required=True)
class User(Auditable):
    columns = ["id", "name", "password"]

    def validate(self):
        if not self.name:
            self.add_error("name", "can't be blank")
"""
from __future__ import annotations

from auditmatch.config import get_config


def flatten(values) -> list:
    """Flatten nested lists/tuples into one list.  Strings are kept whole."""
    flat = []
    for v in values:
        if isinstance(v, (list, tuple)):
            flat.extend(flatten(v))
        else:
            flat.append(v)
    return flat


class Auditable:
    """
    Base class for models the matchers can inspect.

    Class attributes:
      columns             full ordered column list
      primary_key         ignored by auditing unless listed under `only`
      inheritance_column  same, when the model uses single-table inheritance
      audit_options       set by @audited; None means "not audited"
      audit_config        AuditConfig override; None → the active config
    """

    columns:            list = []
    primary_key:        "str | None" = "id"
    inheritance_column: "str | None" = None
    audit_options:      "dict | None" = None
    audit_config = None

    audit_comment = None
    _auditing_on  = True

    def __init__(self, **attrs):
        for name in self.columns:
            setattr(self, name, None)
        for name, value in attrs.items():
            if name not in self.columns and name != "audit_comment":
                raise TypeError(
                    f"{self.__class__.__name__} has no column {name!r}"
                )
            setattr(self, name, value)
        self.errors: dict = {}

    # ── Class-level audit metadata ────────────────────────────────────────────

    @classmethod
    def auditing_enabled(cls) -> bool:
        return cls.audit_options is not None and cls._auditing_on

    @classmethod
    def column_names(cls) -> list:
        return [str(c) for c in cls.columns]

    @classmethod
    def default_ignored_attributes(cls) -> list:
        return [c for c in (cls.primary_key, cls.inheritance_column) if c]

    @classmethod
    def non_audited_columns(cls) -> list:
        options = cls.audit_options or {}
        if options.get("only") is not None:
            only = {str(f) for f in options["only"]}
            return [c for c in cls.column_names() if c not in only]

        config = cls.audit_config or get_config()
        excluded = []
        for name in (cls.default_ignored_attributes()
                     + config.ignored_attributes
                     + [str(f) for f in options.get("except", [])]):
            if name not in excluded:
                excluded.append(name)
        return excluded

    @classmethod
    def comment_required(cls) -> bool:
        return cls.auditing_enabled() and bool(cls.audit_options.get("comment_required"))

    # ── Validation ────────────────────────────────────────────────────────────

    def validate(self) -> None:
        """Hook for model-specific validation.  Call add_error() on problems."""

    def add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def is_valid(self) -> bool:
        self.errors = {}
        self.validate()
        if self.comment_required() and not self.audit_comment:
            self.add_error("audit_comment", "can't be blank")
        return not self.errors

    def __repr__(self):
        values = ", ".join(f"{c}={getattr(self, c)!r}" for c in self.columns)
        return f"{self.__class__.__name__}({values})"


def audited(cls=None, *, only=None, except_=None, on=None, comment_required=False):
    """
    Class decorator that turns auditing on for an Auditable model.

    Usable bare (`@audited`) or with options (`@audited(only=["name"])`).
    List options may be nested; they are flattened before storage.
    """
    def apply(klass):
        if not (isinstance(klass, type) and issubclass(klass, Auditable)):
            raise TypeError(f"@audited needs an Auditable subclass, got {klass!r}")
        options = {"comment_required": bool(comment_required)}
        if only is not None:
            options["only"] = flatten([only])
        if except_ is not None:
            options["except"] = flatten([except_])
        if on is not None:
            options["on"] = flatten([on])
        klass.audit_options = options
        klass._auditing_on = True
        return klass

    if cls is not None:
        return apply(cls)
    return apply


def disable_auditing(cls) -> None:
    cls._auditing_on = False


def enable_auditing(cls) -> None:
    cls._auditing_on = True
