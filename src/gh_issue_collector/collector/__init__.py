"""Request-independent collector components.

- Project registry loaded from YAML
- Project resolution and origin policy
- GitHub issue relay
- Structured logging and the CLI entrypoint
"""
