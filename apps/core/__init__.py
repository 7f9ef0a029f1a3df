# apps/core/__init__.py

"""
Core - Planify base application

Contains:
- Custom User carrying the active organization
- RequestContext resolution (tenancy)
- Validated commands (safe_action / ActionResult)
- Tenant permission decorators
"""
