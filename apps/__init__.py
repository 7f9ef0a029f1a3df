# apps/__init__.py

"""
Planify - Django applications

- core: users, tenant context, validated commands
- board: boards, lists, cards, ordering and realtime sync
- audit: activity log
- billing: free-board quota and subscription status
"""

__version__ = '0.1.0'
