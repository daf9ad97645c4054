"""
Shared utilities: logging and the outbound HTTP client.
"""
