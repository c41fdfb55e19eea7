"""PageLens: SEO and readability auditing for HTML content."""

__version__ = "1.0.0"
