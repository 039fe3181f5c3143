"""Domain core: knowledge base, upstream model and the relay service."""
