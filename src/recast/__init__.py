"""Recast: apply a named preset to a block of text through an LLM provider."""

from recast.constants import VERSION

__version__ = VERSION
