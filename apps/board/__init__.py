# apps/board/__init__.py

"""
Board - kanban boards, lists and cards

Contains:
- Models (Board, List, Card) with dense sibling positions
- Ordering engine and the reorder/copy commands
- Cached board aggregate view
- WebSocket consumer for realtime refresh
"""
