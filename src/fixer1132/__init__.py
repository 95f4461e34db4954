"""
1132 Fixer.

Two privileged macOS maintenance actions (Wi-Fi MAC spoofing, sandboxed Zoom
launch) behind a single-flight task runner, plus a best-effort update check.
"""

__version__ = "1.3.0"
