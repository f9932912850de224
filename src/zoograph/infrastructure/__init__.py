"""Infrastructure components: caching, logging and storage adapters."""
