"""Runtime package.

Keep this module dependency-light: importing `livescribe.runtime.*` in unit tests
should not construct any Google client.
"""

__all__: list[str] = []
