"""
Error types raised by the yamldump emitter.

All errors derive from YAMLError so callers can catch a single base class:

- UnresolvedTypeError: no type descriptor can represent a value
- UnsupportedStyleError: a style override names a style the type lacks
- InvalidSortKeysError: the sort_keys option is neither a bool nor callable

Only UnresolvedTypeError is data-dependent; with skip_invalid enabled the
offending node is dropped instead of raising. The other two are
configuration errors and always abort the call.
"""

from __future__ import annotations


class YAMLError(Exception):
    """Base exception for YAML emission errors."""
    pass


class UnresolvedTypeError(YAMLError):
    """Raised when a value is not a container or string and no type matched."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"unacceptable kind of an object to dump: {type(value).__name__}"
        )


class UnsupportedStyleError(YAMLError):
    """Raised when a style override is not defined by the matched type."""

    def __init__(self, tag: str, style: str | None):
        self.tag = tag
        self.style = style
        super().__init__(f'!<{tag}> tag resolver accepts not "{style}" style')


class InvalidSortKeysError(YAMLError):
    """Raised when sort_keys is neither a boolean nor a comparator."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"sort_keys must be a boolean or a function, got {type(value).__name__}"
        )
