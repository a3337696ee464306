"""Travis CI Client.

Typed Python bindings for the Travis CI REST API covering jobs and build
requests. HTTP status codes are returned as data on the raw response and
are never turned into exceptions by the library itself.
"""

__version__ = "0.1.0"
