"""
gp-publisher — Google Play publish task configuration.

File: src/gp_publisher/__init__.py

Purpose
- Package root. Maps publish-task form fields to the persisted task
  configuration, supplies form defaults and validates submitted values
  before a task definition is saved.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging init).
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
