"""
Casebook — tooling for a repository of use-case documents and skills.

Parses YAML front matter, validates the corpus (required fields, slug
uniqueness, skill references, links, section order) and generates JSON
indexes for publishing.
"""

__version__ = "0.1.0"
