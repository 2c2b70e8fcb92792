"""HTTP surface for the pool exchange."""
