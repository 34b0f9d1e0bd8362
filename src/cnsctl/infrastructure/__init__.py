"""Infrastructure layer — registry clients.

Clients implement the :class:`~cnsctl.infrastructure.registry.RegistryClient`
protocol.  This layer may import from domain but never from services,
commands, or output.
"""
