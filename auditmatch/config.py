"""
Audit configuration.

Process-wide settings the matchers read at evaluation time.  They can be
declared in a YAML file:

    # auditmatch.yaml
    ignored_attributes:
      - lock_version
      - created_at
      - updated_at
    verbose: false

or built in code and passed straight to a matcher:

    be_audited(config=AuditConfig(ignored_attributes=[]))
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

DEFAULT_IGNORED_ATTRIBUTES = [
    "lock_version",
    "created_at",
    "updated_at",
    "created_on",
    "updated_on",
]

CONFIG_FILENAMES = ["auditmatch.yaml", ".auditmatch.yaml", "auditmatch.yml"]
CONFIG_ENV_VAR   = "AUDITMATCH_CONFIG"


class AuditConfig:
    """
    Global audit settings.

    ignored_attributes  attributes excluded from auditing on every model
    verbose             print one trace line per judged check to stderr
    """
    def __init__(self, ignored_attributes=None, verbose: bool = False):
        if ignored_attributes is None:
            ignored_attributes = DEFAULT_IGNORED_ATTRIBUTES
        self.ignored_attributes = [str(a) for a in ignored_attributes]
        self.verbose = bool(verbose)

    @classmethod
    def from_dict(cls, doc: dict) -> "AuditConfig":
        validate_config(doc)
        return cls(
            ignored_attributes=doc.get("ignored_attributes"),
            verbose=doc.get("verbose", False),
        )

    def trace(self, message: str) -> None:
        if self.verbose:
            print(f"[auditmatch] {message}", file=sys.stderr)

    def __repr__(self):
        return (f"AuditConfig(ignored_attributes={self.ignored_attributes!r}, "
                f"verbose={self.verbose!r})")


def validate_config(doc: dict) -> None:
    """Raise ValueError if the config document is malformed."""
    if not isinstance(doc, dict):
        raise ValueError(
            f"Audit config must be a mapping, got {type(doc).__name__}."
        )
    unknown = set(doc) - {"ignored_attributes", "verbose"}
    if unknown:
        raise ValueError(f"Unknown audit config keys: {sorted(unknown)}")
    ignored = doc.get("ignored_attributes")
    if ignored is not None and not isinstance(ignored, list):
        raise ValueError("'ignored_attributes' must be a list of attribute names.")
    if "verbose" in doc and not isinstance(doc["verbose"], bool):
        raise ValueError("'verbose' must be true or false.")


def load_config(path: "str | Path | None" = None) -> AuditConfig:
    """
    Load an AuditConfig from YAML.

    An explicit path (argument or $AUDITMATCH_CONFIG) must exist, otherwise
    FileNotFoundError is raised.  Without one, the current directory is
    searched and defaults are returned when no file is found.
    """
    import yaml

    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        config_path = Path(explicit)
        if not config_path.exists():
            raise FileNotFoundError(f"Audit config not found: {config_path}")
    else:
        config_path = next((Path(c) for c in CONFIG_FILENAMES if Path(c).exists()), None)
        if config_path is None:
            return AuditConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    # An empty file means "all defaults"
    return AuditConfig.from_dict(raw or {})


_active: "AuditConfig | None" = None


def get_config() -> AuditConfig:
    """Return the process-wide config, loading it on first use."""
    global _active
    if _active is None:
        _active = load_config()
    return _active


def set_config(config: "AuditConfig | None") -> "AuditConfig | None":
    """Install `config` as the process-wide config.  Returns the previous one."""
    global _active
    previous, _active = _active, config
    return previous
