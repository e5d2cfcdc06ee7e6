# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MarkupTree exceptions."""

from __future__ import annotations


class MarkupTreeError(Exception):
    """Base exception for MarkupTree errors."""

    pass


class InvalidAttributeError(MarkupTreeError):
    """Raised when a node is given an empty attribute name."""

    pass


class InvalidComponentError(MarkupTreeError):
    """Raised when a block component cannot be normalized into nodes."""

    pass


class UnsupportedOperationError(MarkupTreeError):
    """Raised when a profile is asked for an aggregation it does not enable."""

    pass


class UnknownProfileError(MarkupTreeError, KeyError):
    """Raised when an aggregation profile name is not registered."""

    pass
