"""
Tourmates backend: group ride tours and nearby tour notifications.
"""
