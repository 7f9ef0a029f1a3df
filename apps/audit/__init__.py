# apps/audit/__init__.py

"""
Audit - append-only activity log of board, list and card changes
"""
