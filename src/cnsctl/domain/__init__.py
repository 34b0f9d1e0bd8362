"""Domain layer — namehashing, address codecs, naming rules, error taxonomy.

Pure value-in/value-out functions.  Depends only on stdlib and eth-hash.
It must never import from services, infrastructure, commands, or config.
"""
