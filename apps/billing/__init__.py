# apps/billing/__init__.py

"""
Billing - free-board quota and subscription status
"""
