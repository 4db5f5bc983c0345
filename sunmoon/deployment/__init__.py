"""sunmoon/deployment — HTTP serving for presentation layers."""
