"""Release notes generator.

Collects the closed issues and pull requests of a GitHub milestone, formats
them as an HTML list, optionally publishes them as a release and merges them
into a static release notes page.
"""

__version__ = "0.1.0"
