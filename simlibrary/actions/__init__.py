"""Player actions. Each returns an ``ActionResult``; none raise for domain failures."""

from simlibrary.actions.base import ActionResult

__all__ = ["ActionResult"]
