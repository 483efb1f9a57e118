"""
File Organizer Watchers

Long-running services that re-run the organizer when the directory changes:
- directory.py - watchdog observer with coalesced reorganization passes
"""
