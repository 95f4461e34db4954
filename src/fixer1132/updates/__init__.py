"""
Update check.

- semver.py: version normalize/parse/compare
- release_client.py: GitHub "latest release" fetch (httpx)
"""
