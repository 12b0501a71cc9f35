"""Sample data generators."""

from proplist.generators.base import BaseGenerator
from proplist.generators.property import PropertyGenerator

__all__ = ["BaseGenerator", "PropertyGenerator"]
