"""
Reminder subsystem.

Components:
- reminder_api.py: reminder list entries + registration/cancellation bookkeeping on AppState
- notification_center.py: in-process notification service (repeating triggers on a background loop)
"""
