"""
Detecting the library's own version.

The codebase does not contain the version directly, as it would require
code changes on every release. The releases depend on tagging rather
than in-code version bumps (versions belong to the versioning system,
not to the codebase).

The version is determined only once at startup when the code is loaded.
"""
import importlib.metadata
from typing import Optional

version: Optional[str] = None

try:
    name, *_ = __name__.split('.')  # usually "dokit", unless renamed/forked.
    version = importlib.metadata.version(name)
except importlib.metadata.PackageNotFoundError:
    pass  # running from a source checkout without installation.
