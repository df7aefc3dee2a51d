"""Player roster: filtered/sorted/paged queries and validated writes."""

__version__ = "0.1.0"
