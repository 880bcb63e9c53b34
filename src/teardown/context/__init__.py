"""Teardown Context — lifecycle markers."""

from teardown.context.lifecycle import (
    POST_CONSTRUCT,
    PRE_DESTROY,
    has_marker,
    post_construct,
    pre_destroy,
)

__all__ = [
    "POST_CONSTRUCT",
    "PRE_DESTROY",
    "has_marker",
    "post_construct",
    "pre_destroy",
]
