"""memoctl — memo capture, checklists, deep dives and topics over a markdown vault."""

__version__ = "0.3.0"
