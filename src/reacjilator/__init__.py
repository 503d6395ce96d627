"""Slack reaction-to-translation bridge.

React to a message with a flag emoji and the translation is posted back
into the message's thread.
"""

from reacjilator._version import __version__

__all__ = ["__version__"]
