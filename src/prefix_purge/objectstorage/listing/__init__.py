"""Object storage listing operations."""

from .prefix_lister import PrefixLister, append_page

__all__ = ["PrefixLister", "append_page"]
