"""HTTP middlewares installed by create_app."""
