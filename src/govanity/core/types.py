"""Core type definitions."""

from typing import NewType

# URL path of a vanity import root (e.g., "/caddy/gopkg", "/caddy/gopkg/sub")
# Distinct from arbitrary strings such as repository URLs
URLPath = NewType("URLPath", str)
