"""
Shared utilities for PDF Whisper Connect.

Common functionality used across contexts:
- Text splitting and rounding helpers
- pdfplumber word/line processing
- Coroutine fan-out
- Logging setup and report tables
"""

from pdfwhisper.utils.timestamp import now_exact, session_stamp

__all__ = ["now_exact", "session_stamp"]
