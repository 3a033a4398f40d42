"""Infrastructure layer — remote command stores and definition files.

This layer depends on the domain models and third-party libs (httpx).
It must never import from services, commands, or output.
"""
