"""Concrete provider implementations.

- chat.slack: Slack Web API adapter
- translation.google: Google Cloud Translation v3 adapter

Adapters are imported from their modules directly so that only the
libraries of the providers in use are loaded.
"""
