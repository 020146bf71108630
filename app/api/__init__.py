# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation): 
# Marks the api folder as a Python package: the HTTP front door of PetVally with its routes,
# health checks and middleware.
# 🧪 Purpose (Technical Summary): 
# API layer package. `router.py` mounts every module router under /api, `health.py` holds the
# probes and `middleware/` the error, logging and page gate middleware.
# 🔗 Dependencies: 
# None (package initialization)
# 🔄 Connected Modules / Calls From: 
# app.main.py

"""
PetVally API Package

Structure:
    api/
    ├── __init__.py          # This file
    ├── router.py            # /api router, mounts every module router
    ├── health.py            # Liveness and readiness probes
    └── middleware/          # Error handling, request logging, page gate
"""
