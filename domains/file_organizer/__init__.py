"""
File Organizer Domain

Keeps a single directory tidy:
- Content hashing on a worker pool to detect duplicates
- Extension and age based routing into category folders
- Idempotent relocation, safe to repeat over an organized directory
- A watchdog-driven loop that re-runs the pass when files arrive
"""

__all__ = ["errors", "models", "organizer", "processors", "watchers", "workers"]
