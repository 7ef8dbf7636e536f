"""Config-driven single-entity application toolkit."""
