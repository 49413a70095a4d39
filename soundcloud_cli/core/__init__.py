"""
Core application engine for orchestrating the download process.

This package contains the primary logic. The `DownloadManager` resolves the
URL and fans out track downloads, delegating the work on each individual track
to the `TrackProcessor`.
"""
