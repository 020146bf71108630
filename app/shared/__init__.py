# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools
# that all parts of PetVally use, like database sessions and security features.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, infrastructure and cross-cutting
# concerns used throughout the PetVally modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database infrastructure
- Security and authentication utilities
- Image storage and AI clients
- Logging utilities
"""

__all__ = []
