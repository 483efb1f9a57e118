"""
File Organizer Processors

Per-file processing utilities used by the organizer pass:
- hasher.py - Content-based hash calculation
- age.py - Modification-age buckets
- router.py - Extension-based category routing
- relocator.py - Idempotent moves into destination folders
"""
