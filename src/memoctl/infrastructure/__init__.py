"""Infrastructure layer — document storage, text generation, templates.

This layer depends on stdlib and third-party libs (anyio, openai, anthropic, Jinja2).
The service layer bridges between domain rules and infrastructure.
"""
